"""Tests for the type-erased protocol wrapper."""

from enum import Enum

import pytest

from imbrut.errors import LogicFault
from imbrut.modules.proto import CheckOutcome, CredentialKind, DynProto, ErasedCredential


class _OtherKind(str, Enum):
    SSH = "ssh"


class TestDynProto:
    def test_credentials_are_tagged(self, list_proto) -> None:
        dyn = DynProto(list_proto(["a", "b"]))
        erased = list(dyn.get_credentials())
        assert erased == [
            ErasedCredential(CredentialKind.HTTP, "a"),
            ErasedCredential(CredentialKind.HTTP, "b"),
        ]

    def test_check_delegates(self, list_proto) -> None:
        dyn = DynProto(list_proto(["a", "b"], accepted={"b"}))
        assert dyn.check(ErasedCredential(CredentialKind.HTTP, "a")) is CheckOutcome.REJECTED
        assert dyn.check(ErasedCredential(CredentialKind.HTTP, "b")) is CheckOutcome.ACCEPTED

    def test_kind_mismatch_is_a_logic_fault(self, list_proto) -> None:
        proto = list_proto(["a"])
        dyn = DynProto(proto)
        with pytest.raises(LogicFault):
            dyn.check(ErasedCredential(_OtherKind.SSH, "a"))
        assert proto.events == []

    @pytest.mark.parametrize("value", ["a", ("alice", "a"), None])
    def test_untagged_value_is_a_logic_fault(self, list_proto, value) -> None:
        proto = list_proto(["a"])
        with pytest.raises(LogicFault, match="Untagged"):
            DynProto(proto).check(value)
        assert proto.events == []

    def test_workload_uses_closed_form(self, list_proto) -> None:
        proto = list_proto(["a", "b", "c"])
        assert DynProto(proto).workload() == 3
        assert proto.enumerations == 0

    def test_workload_falls_back_to_enumeration(self, list_proto) -> None:
        proto = list_proto(["a", "b", "c"], closed_form=False)
        assert DynProto(proto).workload() == 3
        assert proto.enumerations == 1

    def test_erased_credential_str(self) -> None:
        assert str(ErasedCredential(CredentialKind.HTTP, "alice:pw")) == "alice:pw"
