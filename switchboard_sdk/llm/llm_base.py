# switchboard_sdk/llm/llm_base.py
# SPDX-License-Identifier: Apache-2.0
"""
LLM contract for text-completion adapters.

Purpose
-------
A narrow, vendor-neutral interface for "prompt in, text out" providers:

- `call()`      one prompt -> one completion string
- `generate()`  several prompts, completed one after another
- `llm_type` / `identifying_params` for logging and caching keys

Each adapter implements only `_call(prompt, options)` and follows the same
linear pipeline: resolve config at construction, build the request body,
execute through the shared `AsyncCaller`, shape the response.

Deliberate Non-Goals
--------------------
- No chat/message roles, streaming, or token counting.
- No routing, fallback or caching.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from switchboard_sdk.core.caller import AsyncCaller, CallerOptions, CancellationSignal
from switchboard_sdk.core.errors import ConflictingParameter

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallOptions(CallerOptions):
    """
    Call-time options for an LLM invocation.

    Attributes:
        stop:      stop sequences for this call only.
        signal:    cancellation token (inherited).
        timeout_s: whole-call budget in seconds (inherited).
    """

    stop: Optional[Sequence[str]] = None


def merge_stop_sequences(
    static: Optional[Sequence[str]],
    call_time: Optional[Sequence[str]],
) -> List[str]:
    """
    Merge the adapter's configured stop sequences with call-time ones.

    Both non-empty is a conflict. Otherwise the non-empty side wins, and the
    result is an empty list when neither side has any.

    Raises:
        ConflictingParameter: both `static` and `call_time` are non-empty.
    """
    if static and call_time:
        raise ConflictingParameter("stop")
    if static:
        return list(static)
    if call_time:
        return list(call_time)
    return []


class BaseLLM(ABC):
    """
    Base class for text-completion adapters.

    Subclasses implement `_call()` and `llm_type`. The base handles option
    normalization, logging and the async context-manager protocol.
    """

    def __init__(self, *, caller: Optional[AsyncCaller] = None) -> None:
        self.caller: AsyncCaller = caller or AsyncCaller.from_settings()

    # --- async context management --------------------------------------------

    async def __aenter__(self) -> "BaseLLM":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release network resources. Default is a no-op."""
        return None

    # --- identity -------------------------------------------------------------

    @property
    @abstractmethod
    def llm_type(self) -> str:
        """Short provider identifier, e.g. "ai21"."""

    @property
    def identifying_params(self) -> Mapping[str, Any]:
        """Parameters that distinguish this configured model from another."""
        return {}

    # --- public API -----------------------------------------------------------

    async def call(
        self,
        prompt: str,
        *,
        stop: Optional[Sequence[str]] = None,
        signal: Optional[CancellationSignal] = None,
        timeout_s: Optional[float] = None,
        options: Optional[CallOptions] = None,
    ) -> str:
        """
        Complete a single prompt.

        Either pass `options` or the individual keyword arguments; when both
        are given the keyword arguments fill whatever `options` leaves unset.
        """
        if not isinstance(prompt, str):
            raise TypeError(f"prompt must be a string, got {type(prompt).__name__}")
        opts = self._coerce_options(options, stop=stop, signal=signal, timeout_s=timeout_s)
        LOG.debug("%s call: prompt_chars=%d", self.llm_type, len(prompt))
        return await self._call(prompt, opts)

    async def generate(
        self,
        prompts: Sequence[str],
        options: Optional[CallOptions] = None,
    ) -> List[str]:
        """Complete each prompt in order; the first failure aborts the batch."""
        opts = options or CallOptions()
        results: List[str] = []
        for prompt in prompts:
            results.append(await self.call(prompt, options=opts))
        return results

    # --- backend hook ---------------------------------------------------------

    @abstractmethod
    async def _call(self, prompt: str, options: CallOptions) -> str:
        """Provider-specific implementation of a single completion."""

    # --- helpers --------------------------------------------------------------

    @staticmethod
    def _coerce_options(
        options: Optional[CallOptions],
        *,
        stop: Optional[Sequence[str]],
        signal: Optional[CancellationSignal],
        timeout_s: Optional[float],
    ) -> CallOptions:
        base = options or CallOptions()
        return CallOptions(
            stop=base.stop if base.stop is not None else stop,
            signal=base.signal if base.signal is not None else signal,
            timeout_s=base.timeout_s if base.timeout_s is not None else timeout_s,
        )

    def __repr__(self) -> str:
        params: Dict[str, Any] = dict(self.identifying_params)
        return f"{type(self).__name__}({params})"


__all__ = ["BaseLLM", "CallOptions", "merge_stop_sequences"]
