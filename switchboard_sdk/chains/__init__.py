# switchboard_sdk/chains/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
Chains: named-input, named-output units of work.
"""

from switchboard_sdk.chains.chain_base import BaseChain, ChainValues
from switchboard_sdk.chains.openai_moderation import (
    POLICY_VIOLATION_MESSAGE,
    ModerationVerdict,
    OpenAIModerationChain,
    OpenAIModerationConfig,
)

__all__ = [
    "BaseChain",
    "ChainValues",
    "ModerationVerdict",
    "OpenAIModerationChain",
    "OpenAIModerationConfig",
    "POLICY_VIOLATION_MESSAGE",
]
