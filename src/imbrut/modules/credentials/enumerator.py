"""Credential pair enumeration."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from .models import Credential
from .sources import CredentialSource, probe_file, read_lines

logger = logging.getLogger(__name__)


class CredentialStream:
    """Re-iterable sequence of credential pairs."""

    def __iter__(self) -> Iterator[Credential]:
        raise NotImplementedError

    def indexed(self) -> Iterator[tuple[int, Credential]]:
        """Yield ``(index, credential)`` with a zero-based index."""
        return enumerate(self)

    def count(self) -> int | None:
        return None


class CredentialEnumerator(CredentialStream):
    """Cartesian product of usernames and passwords.

    Usernames drive the outer loop: every password is tried for one username
    before moving to the next.
    """

    def __init__(self, usernames: CredentialSource, passwords: CredentialSource):
        self.usernames = usernames
        self.passwords = passwords

    def __iter__(self) -> Iterator[Credential]:
        for username in self.usernames:
            for password in self.passwords:
                yield Credential(username, password)

    def count(self) -> int | None:
        users = self.usernames.count()
        passwords = self.passwords.count()
        if users is None or passwords is None:
            return None
        return users * passwords


class CombinedFileSource(CredentialStream):
    """Pairs read from ``username:password`` lines.

    The line is split on the first colon, so passwords may contain colons.
    Lines without a colon are skipped.
    """

    def __init__(self, path: str | Path):
        self.path = probe_file(path)

    def __iter__(self) -> Iterator[Credential]:
        for line in read_lines(self.path):
            if ":" not in line:
                logger.debug("Skipping line without ':' in %s", self.path)
                continue
            username, password = line.split(":", 1)
            yield Credential(username, password)

    def count(self) -> int:
        return sum(1 for _ in self)
