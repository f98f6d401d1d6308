"""HTTP credential checker."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import httpx

from imbrut.errors import ConfigurationError, TransportError, UnsupportedAuthType
from imbrut.modules.credentials import Credential, CredentialStream

from ..base import CheckOutcome, CredentialKind, Proto
from .target import ProtocolTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestTemplate:
    """Credential-free part of the outbound request."""

    method: str
    url: httpx.URL
    headers: dict[str, str] = field(default_factory=dict)


def build_template(target: ProtocolTarget) -> RequestTemplate:
    try:
        url = httpx.URL(target.uri)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"target.uri is not a valid URL: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(f"target.uri must be an absolute http(s) URL: {target.uri}")
    return RequestTemplate(method=target.method, url=url, headers=dict(target.headers))


def classify(status_code: int, body: str, target: ProtocolTarget) -> CheckOutcome:
    """Decide whether a response means the credentials were accepted.

    The status gate runs first, then fail substrings, then success substrings.
    """
    if status_code not in target.success_codes:
        return CheckOutcome.REJECTED
    if any(marker in body for marker in target.fail_if_contains):
        return CheckOutcome.REJECTED
    if any(marker in body for marker in target.success_if_contains):
        return CheckOutcome.ACCEPTED
    if target.accept_when_unmatched:
        return CheckOutcome.ACCEPTED
    return CheckOutcome.REJECTED


class HTTPProto(Proto):
    """Check username/password pairs against one HTTP endpoint."""

    kind = CredentialKind.HTTP

    def __init__(
        self,
        target: ProtocolTarget,
        credentials: CredentialStream,
        client: httpx.Client | None = None,
    ):
        self.target = target
        self.credentials = credentials
        self.template = build_template(target)
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=target.timeout,
            verify=target.verify_ssl,
            follow_redirects=target.follow_redirects,
        )

    def __enter__(self) -> HTTPProto:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def _build_request(self, creds: Credential) -> tuple[httpx.Request, dict[str, Any]]:
        template = self.template
        auth_type = self.target.auth_type
        if auth_type == "form":
            data = {
                self.target.username_field: creds.username,
                self.target.password_field: creds.password,
            }
            request = self.client.build_request(
                template.method, template.url, headers=template.headers, data=data
            )
            return request, {}
        if auth_type == "basic":
            request = self.client.build_request(template.method, template.url, headers=template.headers)
            return request, {"auth": httpx.BasicAuth(creds.username, creds.password)}
        raise UnsupportedAuthType(auth_type)

    def check(self, creds: Credential) -> CheckOutcome:
        request, send_kwargs = self._build_request(creds)
        try:
            response = self.client.send(request, **send_kwargs)
            body = response.text
        except httpx.HTTPError as exc:
            raise TransportError(f"{request.method} {request.url} failed: {exc}") from exc

        outcome = classify(response.status_code, body, self.target)
        logger.debug("%s -> %s (%s)", creds.username, response.status_code, outcome.value)
        return outcome

    def get_credentials(self) -> Iterator[Credential]:
        return iter(self.credentials)

    def count(self) -> int | None:
        return self.credentials.count()
