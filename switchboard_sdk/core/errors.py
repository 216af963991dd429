# switchboard_sdk/core/errors.py
# SPDX-License-Identifier: Apache-2.0
"""
Normalized error taxonomy shared by every Switchboard adapter.

Every adapter raises subclasses of `AdapterError` so callers can make
consistent decisions (retry, surface to a user, fix configuration) without
vendor-specific conditionals.

Error kinds
-----------
- MissingCredential       construction-time, never retried
- ConflictingParameter    raised before any network call
- HttpStatusError         non-success HTTP status; carries the raw response
- TransportError          no response received (DNS, connect, reset, ...)
- EmptyResult             provider omitted a field the adapter treats as mandatory
- RequestCancelled        caller fired the cancellation signal
- DeadlineExceeded        per-call timeout elapsed
- ContentPolicyViolation  moderation flagged input and the chain was told to raise
- ToolInputError          tool input failed schema validation
- ChainInputError         chain invoked without a required input key

Adapters perform no internal recovery: errors surface to the invoking caller
unmodified, except that foreign failures are wrapped into this taxonomy.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence


class AdapterError(Exception):
    """
    Base exception for all adapter errors.

    Attributes:
        message:
            Human-readable description (safe for logs; never contains secrets).
        code:
            Upper-snake-case machine code.
        details:
            Additional JSON-safe context.
    """

    default_code = "ADAPTER_ERROR"

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = dict(details or {})

    def __str__(self) -> str:
        base = self.message or self.__class__.__name__
        if self.code:
            base += f" [code={self.code}]"
        if self.details:
            base += f" details={self.details}"
        return base


class MissingCredential(AdapterError):
    """
    A required credential was neither passed explicitly nor found through the
    credential resolver.

    `key` is the environment variable name the resolver consulted.
    """

    default_code = "MISSING_CREDENTIAL"

    def __init__(self, key: str, message: Optional[str] = None, **kwargs: Any):
        self.key = key
        kwargs.setdefault("details", {"key": key})
        super().__init__(
            message
            or f'No credential found for "{key}". Pass it explicitly or set {key} in the environment.',
            **kwargs,
        )


class ConflictingParameter(AdapterError):
    """A parameter was supplied in two places that cannot both apply."""

    default_code = "CONFLICTING_PARAMETER"

    def __init__(self, parameter: str, message: Optional[str] = None, **kwargs: Any):
        self.parameter = parameter
        kwargs.setdefault("details", {"parameter": parameter})
        super().__init__(
            message
            or f"`{parameter}` found in both the call options and the adapter's default params.",
            **kwargs,
        )


class HttpStatusError(AdapterError):
    """
    The provider answered with a non-success HTTP status.

    The raw response object is kept on `response`; `details` holds only the
    JSON-safe status code and URL.
    """

    default_code = "HTTP_STATUS"

    def __init__(
        self,
        status_code: int,
        response: Any = None,
        *,
        url: Optional[str] = None,
        provider: Optional[str] = None,
        **kwargs: Any,
    ):
        self.status_code = int(status_code)
        self.response = response
        self.url = url
        prefix = f"{provider} call" if provider else "Provider call"
        message = f"{prefix} failed with status code {self.status_code}"
        if url:
            message += f" ({url})"
        details = {"status_code": self.status_code}
        if url:
            details["url"] = url
        kwargs.setdefault("details", details)
        super().__init__(message, **kwargs)


class TransportError(AdapterError):
    """
    No response was received from the provider.

    The original failure's message is preserved verbatim and the original
    exception is chained as `__cause__` by the raiser.
    """

    default_code = "TRANSPORT"

    def __init__(self, message: str, *, url: Optional[str] = None, **kwargs: Any):
        self.url = url
        if url:
            kwargs.setdefault("details", {"url": url})
        super().__init__(message, **kwargs)


class EmptyResult(AdapterError):
    """A provider response omitted a field the adapter's policy treats as mandatory."""

    default_code = "EMPTY_RESULT"

    def __init__(self, field: str, message: Optional[str] = None, **kwargs: Any):
        self.field = field
        kwargs.setdefault("details", {"field": field})
        super().__init__(message or f"No {field} found in response", **kwargs)


class RequestCancelled(AdapterError):
    """The caller's cancellation signal fired before the call completed."""

    default_code = "CANCELLED"

    def __init__(self, reason: Optional[str] = None, **kwargs: Any):
        self.reason = reason
        message = "request cancelled"
        if reason:
            message += f": {reason}"
        super().__init__(message, **kwargs)


class DeadlineExceeded(AdapterError):
    """The per-call timeout elapsed before the provider answered."""

    default_code = "DEADLINE_EXCEEDED"

    def __init__(self, timeout_s: Optional[float] = None, **kwargs: Any):
        self.timeout_s = timeout_s
        kwargs.setdefault("details", {"timeout_s": timeout_s})
        super().__init__("operation timed out", **kwargs)


class ContentPolicyViolation(AdapterError):
    """Moderation flagged the input and the chain is configured to raise."""

    default_code = "CONTENT_POLICY"

    def __init__(self, message: str, *, verdict: Any = None, **kwargs: Any):
        self.verdict = verdict
        super().__init__(message, **kwargs)


class ToolInputError(AdapterError):
    """Tool input did not validate against the tool's argument schema."""

    default_code = "TOOL_INPUT"

    def __init__(self, tool: str, message: str, **kwargs: Any):
        self.tool = tool
        kwargs.setdefault("details", {"tool": tool})
        super().__init__(message, **kwargs)


class ChainInputError(AdapterError):
    """A chain was invoked without one or more of its input keys."""

    default_code = "CHAIN_INPUT"

    def __init__(self, missing: Sequence[str], **kwargs: Any):
        self.missing = list(missing)
        kwargs.setdefault("details", {"missing": self.missing})
        super().__init__(f"Missing some input keys: {self.missing}", **kwargs)


__all__ = [
    "AdapterError",
    "MissingCredential",
    "ConflictingParameter",
    "HttpStatusError",
    "TransportError",
    "EmptyResult",
    "RequestCancelled",
    "DeadlineExceeded",
    "ContentPolicyViolation",
    "ToolInputError",
    "ChainInputError",
]
