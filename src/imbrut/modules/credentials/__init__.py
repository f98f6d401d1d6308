"""Credential sources and enumeration."""

from .enumerator import CombinedFileSource, CredentialEnumerator, CredentialStream
from .models import Credential
from .sources import CredentialSource, FileWithStrings, StaticStrings, StringsGenerator

__all__ = [
    "Credential",
    "CredentialSource",
    "CredentialStream",
    "CredentialEnumerator",
    "CombinedFileSource",
    "FileWithStrings",
    "StaticStrings",
    "StringsGenerator",
]
