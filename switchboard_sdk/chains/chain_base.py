# switchboard_sdk/chains/chain_base.py
# SPDX-License-Identifier: Apache-2.0
"""
Chain contract: named inputs in, named outputs out.

A chain declares the keys it reads (`input_keys`) and writes
(`output_keys`). `call()` checks inputs before running and outputs after.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from switchboard_sdk.core.caller import AsyncCaller, CancellationSignal
from switchboard_sdk.core.errors import AdapterError, ChainInputError

LOG = logging.getLogger(__name__)

ChainValues = Dict[str, Any]


class BaseChain(ABC):
    """Base class for chains."""

    def __init__(self, *, caller: Optional[AsyncCaller] = None) -> None:
        self.caller: AsyncCaller = caller or AsyncCaller.from_settings()

    @property
    @abstractmethod
    def input_keys(self) -> List[str]:
        """Keys this chain expects in its input values."""

    @property
    @abstractmethod
    def output_keys(self) -> List[str]:
        """Keys this chain writes to its output values."""

    @property
    @abstractmethod
    def chain_type(self) -> str:
        """Short identifier, e.g. "moderation_chain"."""

    async def call(
        self,
        values: Mapping[str, Any],
        *,
        signal: Optional[CancellationSignal] = None,
        return_only_outputs: bool = False,
    ) -> ChainValues:
        """
        Run the chain.

        Returns the inputs merged with the outputs, or only the outputs when
        `return_only_outputs` is set.

        Raises:
            ChainInputError: an input key is missing.
        """
        inputs = dict(values)
        missing = [k for k in self.input_keys if k not in inputs]
        if missing:
            raise ChainInputError(missing)

        outputs = await self._call(inputs, signal=signal)

        absent = [k for k in self.output_keys if k not in outputs]
        if absent:
            raise AdapterError(
                f"{self.chain_type} did not produce output keys {absent}",
                code="CHAIN_OUTPUT",
            )
        if return_only_outputs:
            return dict(outputs)
        return {**inputs, **outputs}

    async def run(self, text: Any, *, signal: Optional[CancellationSignal] = None) -> Any:
        """Convenience wrapper for chains with exactly one input and one output key."""
        if len(self.input_keys) != 1 or len(self.output_keys) != 1:
            raise ValueError("run() requires exactly one input key and one output key")
        result = await self.call({self.input_keys[0]: text}, signal=signal)
        return result[self.output_keys[0]]

    @abstractmethod
    async def _call(
        self,
        values: ChainValues,
        *,
        signal: Optional[CancellationSignal] = None,
    ) -> ChainValues:
        """Chain-specific logic; returns at least `output_keys`."""


__all__ = ["BaseChain", "ChainValues"]
