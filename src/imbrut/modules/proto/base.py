"""Base contract for protocol checkers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from enum import Enum
from typing import Any


class CheckOutcome(str, Enum):
    """Binary result of one credential check."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"


class CredentialKind(str, Enum):
    """Closed set of credential shapes a protocol can check."""

    HTTP = "http"


class Proto(ABC):
    """A protocol that can enumerate candidate credentials and check one of them."""

    kind: CredentialKind

    @abstractmethod
    def check(self, creds: Any) -> CheckOutcome:
        """Check one credential against the target."""

    @abstractmethod
    def get_credentials(self) -> Iterator[Any]:
        """Return a fresh lazy stream of credentials."""

    def count(self) -> int | None:
        """Closed-form size of the credential stream, or None."""
        return None

    def close(self) -> None:
        """Release resources held by the checker."""

    def get_workload(self) -> int:
        count = self.count()
        if count is not None:
            return count
        return sum(1 for _ in self.get_credentials())
