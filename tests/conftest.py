"""Test configuration and fixtures for imbrut."""

import tempfile
from collections.abc import Callable, Generator, Iterator
from pathlib import Path
from typing import Any

import pytest
import yaml

from imbrut.errors import TransportError
from imbrut.modules.proto import CheckOutcome, CredentialKind, Proto


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep IMBRUT_* variables from the developer's shell out of the tests."""
    for key in (
        "IMBRUT_CONFIG",
        "IMBRUT_USERNAMES_FILE",
        "IMBRUT_PASSWORDS_FILE",
        "IMBRUT_CREDENTIALS_FILE",
        "IMBRUT_VERBOSE",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_lines(temp_dir: Path) -> Callable[[str, list[str]], Path]:
    """Write a newline-terminated text file into the temp dir."""

    def _write(name: str, lines: list[str]) -> Path:
        path = temp_dir / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_config(temp_dir: Path) -> Callable[[dict[str, Any]], Path]:
    """Dump a config mapping to config.yml in the temp dir."""

    def _write(data: dict[str, Any]) -> Path:
        path = temp_dir / "config.yml"
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def target_config() -> dict[str, Any]:
    return {
        "uri": "https://app.example.test/login",
        "method": "POST",
        "headers": {"User-Agent": "imbrut-tests"},
        "auth_type": "form",
        "success_codes": [200],
        "success_if_contains": ["welcome"],
        "fail_if_contains": ["locked"],
    }


class ListProto(Proto):
    """In-memory protocol: accepts passwords listed in ``accepted``."""

    kind = CredentialKind.HTTP

    def __init__(
        self,
        credentials: list[str],
        accepted: set[str] | None = None,
        failing: set[str] | None = None,
        events: list[tuple[str, Any]] | None = None,
        closed_form: bool = True,
    ):
        self.credentials = credentials
        self.accepted = accepted or set()
        self.failing = failing or set()
        self.events = events if events is not None else []
        self.closed_form = closed_form
        self.enumerations = 0

    def check(self, creds: str) -> CheckOutcome:
        self.events.append(("check", creds))
        if creds in self.failing:
            raise TransportError(f"connection reset for {creds}")
        if creds in self.accepted:
            return CheckOutcome.ACCEPTED
        return CheckOutcome.REJECTED

    def get_credentials(self) -> Iterator[str]:
        self.enumerations += 1
        return iter(self.credentials)

    def count(self) -> int | None:
        return len(self.credentials) if self.closed_form else None


@pytest.fixture
def list_proto() -> type[ListProto]:
    return ListProto
