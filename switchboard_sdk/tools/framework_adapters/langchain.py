# switchboard_sdk/tools/framework_adapters/langchain.py
# SPDX-License-Identifier: Apache-2.0

"""
LangChain bridge for Switchboard structured tools.

Exposes a `StructuredTool` as a `langchain_core.tools.StructuredTool` so it
can be handed to LangChain agents. Validation still goes through the
Switchboard tool's `args_schema` and `arun()`, so errors surface as
`ToolInputError` exactly as they do outside LangChain.

Requires the `langchain` extra (`langchain-core`).
"""

from __future__ import annotations

import logging
from typing import Any

from langchain_core.tools import StructuredTool as LangChainStructuredTool

from switchboard_sdk.tools.tool_base import StructuredTool

LOG = logging.getLogger(__name__)


def to_langchain_tool(tool: StructuredTool) -> LangChainStructuredTool:
    """Wrap `tool` as an async-only LangChain structured tool."""

    async def _invoke(**kwargs: Any) -> Any:
        return await tool.arun(kwargs)

    LOG.debug("Bridging tool %s to LangChain", tool.name)
    return LangChainStructuredTool.from_function(
        coroutine=_invoke,
        name=tool.name,
        description=tool.description,
        args_schema=tool.args_schema,
    )


__all__ = ["to_langchain_tool"]
