# SPDX-License-Identifier: Apache-2.0
"""
Switchboard SDK tests.

Unit tests for the shared caller, credential and settings layers, plus
adapter tests that fake the network with `httpx.MockTransport` or fake
`openai` client objects.
"""
