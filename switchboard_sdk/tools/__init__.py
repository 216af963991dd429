# switchboard_sdk/tools/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
Structured tools, OpenAI function descriptions and the agent action schema.
"""

from switchboard_sdk.tools.tool_base import (
    FINISH_NAME,
    AgentAction,
    StructuredTool,
    format_to_openai_function,
)

__all__ = [
    "AgentAction",
    "FINISH_NAME",
    "StructuredTool",
    "format_to_openai_function",
]
