"""Client abstractions."""

from .http import RequestContext, build_request_context, create_http_client

__all__ = ["RequestContext", "build_request_context", "create_http_client"]
