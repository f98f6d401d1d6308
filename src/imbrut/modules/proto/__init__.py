"""Protocol checkers and the type-erased wrapper the pacing driver uses."""

from .base import CheckOutcome, CredentialKind, Proto
from .erased import DynProto, ErasedCredential
from .http import HTTPProto, ProtocolTarget, classify

__all__ = [
    "CheckOutcome",
    "CredentialKind",
    "DynProto",
    "ErasedCredential",
    "HTTPProto",
    "Proto",
    "ProtocolTarget",
    "classify",
]
