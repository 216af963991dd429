# switchboard_sdk/llm/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
Text-completion LLM contract and provider adapters.
"""

from switchboard_sdk.llm.ai21_adapter import AI21, AI21Config, AI21PenaltyData
from switchboard_sdk.llm.llm_base import BaseLLM, CallOptions, merge_stop_sequences

__all__ = [
    "BaseLLM",
    "CallOptions",
    "merge_stop_sequences",
    "AI21",
    "AI21Config",
    "AI21PenaltyData",
]
