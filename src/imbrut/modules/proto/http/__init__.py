"""HTTP protocol checker."""

from .checker import HTTPProto, RequestTemplate, build_template, classify
from .target import AUTH_TYPES, ProtocolTarget

__all__ = [
    "AUTH_TYPES",
    "HTTPProto",
    "ProtocolTarget",
    "RequestTemplate",
    "build_template",
    "classify",
]
