# switchboard_sdk/tools/framework_adapters/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
Framework bridges for Switchboard tools. Import the submodule you need;
each depends on its framework being installed.
"""
