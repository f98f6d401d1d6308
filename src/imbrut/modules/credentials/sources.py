"""Lazy string sources for usernames and passwords."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from imbrut.errors import ConfigurationError, CredentialFileError

logger = logging.getLogger(__name__)


class CredentialSource:
    """Lazy, re-iterable sequence of candidate strings.

    Every call to ``iter()`` starts a fresh, independent stream, so one pass can
    count while another consumes.
    """

    def __iter__(self) -> Iterator[str]:
        raise NotImplementedError

    def count(self) -> int | None:
        """Return the number of strings without materializing them, or None."""
        return None


class StaticStrings(CredentialSource):
    """In-memory source, used for inline username lists."""

    def __init__(self, values: Iterable[str]):
        self.values = tuple(values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def count(self) -> int:
        return len(self.values)


def probe_file(path: str | Path) -> Path:
    """Check that a credential file can be opened for reading."""
    path = Path(path)
    try:
        with path.open("rb"):
            pass
    except OSError as exc:
        raise CredentialFileError(f"Cannot open credential file {path}: {exc}") from exc
    return path


def read_lines(path: Path) -> Iterator[str]:
    """Yield decoded lines without line endings, skipping non-UTF-8 lines."""
    with path.open("rb") as handle:
        for lineno, raw in enumerate(handle, start=1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError:
                logger.debug("Skipping undecodable line %d in %s", lineno, path)
                continue
            yield line.rstrip("\r\n")


class FileWithStrings(CredentialSource):
    """One candidate per line of a text file."""

    def __init__(self, path: str | Path):
        self.path = probe_file(path)

    def __iter__(self) -> Iterator[str]:
        return read_lines(self.path)

    def count(self) -> int:
        return sum(1 for _ in read_lines(self.path))


class StringsGenerator(CredentialSource):
    """Every ordered string of ``size`` characters over an alphabet.

    Yields the full Cartesian power ``alphabet ** size`` in lexicographic order
    of alphabet position. Repeated alphabet characters are dropped, keeping the
    first occurrence.
    """

    def __init__(self, allowed_chars: Iterable[str], size: int):
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise ConfigurationError(f"password_length must be a non-negative integer, got {size!r}")
        self.alphabet = "".join(dict.fromkeys("".join(allowed_chars)))
        self.size = size

    def __iter__(self) -> Iterator[str]:
        for combo in itertools.product(self.alphabet, repeat=self.size):
            yield "".join(combo)

    def count(self) -> int:
        return len(self.alphabet) ** self.size
