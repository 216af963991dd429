# switchboard_sdk/tools/tool_base.py
# SPDX-License-Identifier: Apache-2.0
"""
Structured tools and their OpenAI function-calling description.

A `StructuredTool` declares its arguments as a pydantic model. Input is
validated against that model before `_arun()` sees it, and the same model
supplies the JSON schema used when advertising the tool to a model:

    class SearchArgs(BaseModel):
        query: str
        limit: int = 5

    class Search(StructuredTool):
        name = "search"
        description = "Search the index."
        args_schema = SearchArgs

        async def _arun(self, query: str, limit: int = 5) -> str:
            ...

    format_to_openai_function(Search())
    # {"name": "search", "description": "...", "parameters": {...json schema...}}
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Mapping, Type

from pydantic import BaseModel, Field, ValidationError

from switchboard_sdk.core.errors import ToolInputError

LOG = logging.getLogger(__name__)

# Name of the pseudo-tool an agent emits when it is done.
FINISH_NAME = "finish"


class AgentAction(BaseModel):
    """A tool invocation requested by an agent."""

    name: str
    args: Dict[str, Any] = Field(default_factory=dict)

    @property
    def is_finish(self) -> bool:
        return self.name == FINISH_NAME


class StructuredTool(ABC):
    """
    Base class for tools whose input is described by a pydantic model.

    Subclasses set `name`, `description` and `args_schema` and implement
    `_arun(**kwargs)`.
    """

    name: ClassVar[str]
    description: ClassVar[str]
    args_schema: ClassVar[Type[BaseModel]]

    async def arun(self, tool_input: Any) -> Any:
        """
        Validate `tool_input` and run the tool.

        `tool_input` may be a mapping or an already-built `args_schema`
        instance.

        Raises:
            ToolInputError: input does not match `args_schema`.
        """
        try:
            parsed = self.args_schema.model_validate(tool_input)
        except ValidationError as exc:
            LOG.debug("Tool %s rejected input: %s", self.name, exc)
            raise ToolInputError(
                self.name,
                f"Received tool input did not match expected schema: {exc}",
            ) from exc
        return await self._arun(**parsed.model_dump())

    async def run_action(self, action: AgentAction) -> Any:
        if action.name != self.name:
            raise ToolInputError(self.name, f"Action targets tool {action.name!r}")
        return await self.arun(action.args)

    @abstractmethod
    async def _arun(self, **kwargs: Any) -> Any:
        """Tool body; receives validated arguments as keyword arguments."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def format_to_openai_function(tool: StructuredTool) -> Mapping[str, Any]:
    """Describe `tool` in OpenAI's function-calling format."""
    return {
        "name": tool.name,
        "description": tool.description,
        "parameters": tool.args_schema.model_json_schema(),
    }


__all__ = [
    "AgentAction",
    "FINISH_NAME",
    "StructuredTool",
    "format_to_openai_function",
]
