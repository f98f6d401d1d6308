"""End-to-end runs against a mocked HTTP endpoint."""

import httpx
import pytest
import respx
from httpx import Response

from imbrut.application import Application
from imbrut.config import build_settings
from imbrut.errors import CredentialFileError
from imbrut.modules.credentials import Credential
from imbrut.modules.strategy import RunOutcome

TARGET_URL = "https://app.example.test/login"


def _login_handler(valid: tuple[str, str]):
    def _handle(request: httpx.Request) -> Response:
        fields = dict(item.split("=", 1) for item in request.content.decode().split("&"))
        if (fields["username"], fields["password"]) == valid:
            return Response(200, text="welcome back")
        return Response(200, text="Invalid credentials")

    return _handle


class TestApplication:
    @respx.mock
    def test_combo_file_stops_on_match(self, write_lines, target_config) -> None:
        route = respx.post(TARGET_URL).mock(side_effect=_login_handler(("alice", "right")))
        combo = write_lines("credentials.txt", ["alice:wrong", "alice:right", "alice:later"])
        settings = build_settings(
            {"dict_type": "combo", "credentials_file": str(combo), "target": target_config}
        )

        result = Application(settings).run()

        assert result.outcome is RunOutcome.MATCH
        assert result.credential == Credential("alice", "right")
        assert result.checked == 2
        assert route.call_count == 2

    @respx.mock
    def test_all_wrong_file_is_exhausted(self, write_lines, target_config) -> None:
        route = respx.post(TARGET_URL).mock(side_effect=_login_handler(("alice", "right")))
        combo = write_lines("credentials.txt", [f"alice:wrong{i}" for i in range(5)])
        settings = build_settings(
            {"dict_type": "combo", "credentials_file": str(combo), "target": target_config}
        )

        result = Application(settings).run()

        assert result.outcome is RunOutcome.EXHAUSTED
        assert result.credential is None
        assert result.checked == 5
        assert route.call_count == 5

    @respx.mock
    def test_generator_with_pacing(self, target_config) -> None:
        respx.post(TARGET_URL).mock(side_effect=_login_handler(("admin", "ba")))
        sleeps: list[float] = []
        settings = build_settings(
            {
                "dict_type": "generator",
                "dict_props": {"password_length": 2, "allowed_chars": ["ab"]},
                "usernames": ["admin"],
                "target": target_config,
                "strategy": [{"requests": 2}, {"sleep": 250}],
            }
        )

        result = Application(settings, sleep=sleeps.append).run()

        # aa, ab | sleep | ba -> match
        assert result.credential == Credential("admin", "ba")
        assert result.checked == 3
        assert sleeps == [0.25]

    @respx.mock
    def test_transport_error_does_not_abort(self, write_lines, target_config) -> None:
        respx.post(TARGET_URL).mock(
            side_effect=[
                httpx.ReadTimeout("timed out"),
                Response(200, text="welcome back"),
            ]
        )
        usernames = write_lines("usernames.txt", ["alice"])
        passwords = write_lines("passwords.txt", ["one", "two"])
        settings = build_settings(
            {
                "usernames_file": str(usernames),
                "passwords_file": str(passwords),
                "target": target_config,
            }
        )

        result = Application(settings).run()

        assert result.credential == Credential("alice", "two")
        assert len(result.errors) == 1
        assert result.errors[0].credential == Credential("alice", "one")

    def test_workload_without_requests(self, write_lines, target_config) -> None:
        usernames = write_lines("usernames.txt", ["a", "b", "c"])
        settings = build_settings(
            {
                "dict_type": "generator",
                "dict_props": {"password_length": 3, "allowed_chars": ["01"]},
                "usernames_file": str(usernames),
                "target": target_config,
            }
        )
        assert Application(settings).workload() == 24

    def test_missing_password_file(self, temp_dir, target_config) -> None:
        settings = build_settings(
            {
                "usernames": ["alice"],
                "passwords_file": str(temp_dir / "missing.txt"),
                "target": target_config,
            }
        )
        with pytest.raises(CredentialFileError):
            Application(settings).run()
