# SPDX-License-Identifier: Apache-2.0
"""
Structured tools: validation, OpenAI function format, agent actions and
the LangChain bridge.
"""

import pytest
from pydantic import BaseModel, Field

from switchboard_sdk.core.errors import ToolInputError
from switchboard_sdk.tools.tool_base import (
    FINISH_NAME,
    AgentAction,
    StructuredTool,
    format_to_openai_function,
)

pytestmark = pytest.mark.asyncio


class SearchArgs(BaseModel):
    query: str = Field(description="What to look for")
    limit: int = 5


class Search(StructuredTool):
    name = "search"
    description = "Search the document index."
    args_schema = SearchArgs

    async def _arun(self, query: str, limit: int = 5) -> str:
        return f"{query}:{limit}"


async def test_openai_function_format_uses_json_schema():
    fn = format_to_openai_function(Search())

    assert fn["name"] == "search"
    assert fn["description"] == "Search the document index."
    assert fn["parameters"] == SearchArgs.model_json_schema()
    assert fn["parameters"]["required"] == ["query"]
    assert fn["parameters"]["properties"]["query"]["description"] == "What to look for"


async def test_valid_input_reaches_tool_body():
    assert await Search().arun({"query": "cats"}) == "cats:5"
    assert await Search().arun({"query": "dogs", "limit": "3"}) == "dogs:3"


async def test_model_instance_is_accepted():
    assert await Search().arun(SearchArgs(query="fish", limit=1)) == "fish:1"


@pytest.mark.parametrize("bad", [{}, {"query": "x", "limit": "many"}, "just a string"])
async def test_invalid_input_raises_tool_input_error(bad):
    with pytest.raises(ToolInputError) as excinfo:
        await Search().arun(bad)

    assert excinfo.value.tool == "search"
    assert "did not match expected schema" in str(excinfo.value)


async def test_agent_action_dispatch():
    action = AgentAction(name="search", args={"query": "birds"})

    assert await Search().run_action(action) == "birds:5"
    assert not action.is_finish
    assert AgentAction(name=FINISH_NAME).is_finish


async def test_action_for_another_tool_is_rejected():
    with pytest.raises(ToolInputError):
        await Search().run_action(AgentAction(name="calculator", args={}))


async def test_langchain_bridge_delegates_to_tool():
    pytest.importorskip("langchain_core")
    from switchboard_sdk.tools.framework_adapters.langchain import to_langchain_tool

    lc_tool = to_langchain_tool(Search())

    assert lc_tool.name == "search"
    assert lc_tool.description == "Search the document index."
    assert await lc_tool.ainvoke({"query": "cats", "limit": 2}) == "cats:2"
