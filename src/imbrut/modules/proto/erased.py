"""Uniform wrapper that hides the concrete credential shape of a protocol."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from imbrut.errors import LogicFault

from .base import CheckOutcome, CredentialKind, Proto


@dataclass(frozen=True)
class ErasedCredential:
    """A credential tagged with the kind of protocol that produced it."""

    kind: CredentialKind
    value: Any

    def __str__(self) -> str:
        return str(self.value)


class DynProto:
    """Drive any ``Proto`` through tagged credentials.

    The pacing driver only sees ``ErasedCredential`` values; the tag is checked
    on every call so that credentials from one protocol never reach another.
    """

    def __init__(self, proto: Proto):
        self.proto = proto
        self.kind = proto.kind

    def check(self, creds: ErasedCredential) -> CheckOutcome:
        if not isinstance(creds, ErasedCredential):
            raise LogicFault(
                f"Untagged {type(creds).__name__} passed to a {self.kind.value!r} checker"
            )
        if creds.kind is not self.kind:
            raise LogicFault(
                f"Credentials of kind {creds.kind!r} passed to a {self.kind.value!r} checker"
            )
        return self.proto.check(creds.value)

    def get_credentials(self) -> Iterator[ErasedCredential]:
        kind = self.kind
        return (ErasedCredential(kind, value) for value in self.proto.get_credentials())

    def workload(self) -> int:
        return self.proto.get_workload()
