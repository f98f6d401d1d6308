"""Wiring between settings, credential sources, protocols and the pacing driver."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import httpx

from imbrut.config import Settings
from imbrut.errors import ConfigurationError
from imbrut.modules.credentials import (
    CombinedFileSource,
    CredentialEnumerator,
    CredentialSource,
    CredentialStream,
    FileWithStrings,
    StaticStrings,
    StringsGenerator,
)
from imbrut.modules.progress import ProgressReporter
from imbrut.modules.proto import DynProto, HTTPProto, Proto
from imbrut.modules.strategy import RunResult, Strategy

logger = logging.getLogger(__name__)


class Application:
    """Build the components described by ``Settings`` and run them."""

    def __init__(
        self,
        settings: Settings,
        reporter: ProgressReporter | None = None,
        client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.reporter = reporter
        self.client = client
        self.sleep = sleep

    def get_passwords(self) -> CredentialSource:
        """Password stream for the configured dictionary type."""
        settings = self.settings
        if settings.dict_type == "file":
            return FileWithStrings(settings.passwords_file)
        if settings.dict_type == "generator":
            return StringsGenerator(settings.allowed_chars, settings.password_length)
        raise ConfigurationError(f"Unsupported password source type: {settings.dict_type}")

    def get_usernames(self) -> CredentialSource:
        """Inline usernames when configured, otherwise the usernames file."""
        if self.settings.usernames is not None:
            return StaticStrings(self.settings.usernames)
        return FileWithStrings(self.settings.usernames_file)

    def get_credentials(self) -> CredentialStream:
        if self.settings.dict_type == "combo":
            return CombinedFileSource(self.settings.credentials_file)
        return CredentialEnumerator(self.get_usernames(), self.get_passwords())

    def get_proto(self) -> Proto:
        """Protocol checker for the configured protocol."""
        if self.settings.proto == "http":
            return HTTPProto(self.settings.target, self.get_credentials(), client=self.client)
        raise ConfigurationError(f"Unsupported protocol: {self.settings.proto}")

    def workload(self) -> int:
        """Number of credentials a run would try, without sending requests."""
        proto = self.get_proto()
        try:
            return DynProto(proto).workload()
        finally:
            proto.close()

    def run(self) -> RunResult:
        """Application entrypoint."""
        proto = self.get_proto()
        try:
            strategy = Strategy(
                DynProto(proto),
                plan=list(self.settings.strategy),
                reporter=self.reporter,
                sleep=self.sleep,
                max_transport_errors=self.settings.max_transport_errors,
            )
            return strategy.run()
        finally:
            proto.close()
