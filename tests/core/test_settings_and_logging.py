# SPDX-License-Identifier: Apache-2.0
"""
SDKSettings from the environment, configure_logging, and error rendering.
"""

import logging

import pytest

from switchboard_sdk.core.config import SDKSettings, _env_flag
from switchboard_sdk.core.errors import (
    AdapterError,
    ChainInputError,
    ConflictingParameter,
    EmptyResult,
    HttpStatusError,
)
from switchboard_sdk.core.logging_utils import SDK_LOGGER_NAME, configure_logging


def test_defaults_when_environment_is_empty():
    settings = SDKSettings.from_env({})

    assert settings == SDKSettings()
    assert settings.max_retries == 6
    assert settings.max_concurrency == 0
    assert settings.timeout_s == 60.0
    assert settings.log_level == "WARNING"
    assert settings.retry_jitter is True


def test_values_are_parsed_from_environment():
    settings = SDKSettings.from_env(
        {
            "SWITCHBOARD_MAX_RETRIES": "2",
            "SWITCHBOARD_MAX_CONCURRENCY": "8",
            "SWITCHBOARD_TIMEOUT_S": "12.5",
            "SWITCHBOARD_LOG_LEVEL": "debug",
            "SWITCHBOARD_RETRY_JITTER": "off",
        }
    )

    assert settings == SDKSettings(
        max_retries=2,
        max_concurrency=8,
        timeout_s=12.5,
        log_level="DEBUG",
        retry_jitter=False,
    )


def test_malformed_numbers_fall_back_to_defaults(caplog):
    with caplog.at_level(logging.WARNING):
        settings = SDKSettings.from_env({"SWITCHBOARD_MAX_RETRIES": "many"})

    assert settings.max_retries == 6
    assert "SWITCHBOARD_MAX_RETRIES" in caplog.text


@pytest.mark.parametrize("raw, expected", [("1", True), ("TRUE", True), ("yes", True), ("0", False), ("nope", False)])
def test_env_flag(raw, expected):
    assert _env_flag("X", "0", {"X": raw}) is expected


def test_negative_settings_are_rejected():
    with pytest.raises(ValueError):
        SDKSettings(max_retries=-1)


def test_configure_logging_installs_single_handler():
    logger = configure_logging("INFO")
    configure_logging("DEBUG")

    installed = [h for h in logger.handlers if getattr(h, "_switchboard_installed", False)]
    assert logger.name == SDK_LOGGER_NAME
    assert len(installed) == 1
    assert logger.level == logging.DEBUG

    for h in installed:
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)


def test_error_str_carries_code_and_details():
    err = AdapterError("boom", code="X_FAILED", details={"k": 1})

    assert str(err) == "boom [code=X_FAILED] details={'k': 1}"


def test_error_variants_name_their_subject():
    assert "500" in str(HttpStatusError(500, url="https://x/complete", provider="AI21"))
    assert "completions" in str(EmptyResult("completions"))
    assert ConflictingParameter("stop").parameter == "stop"
    assert ChainInputError(["input"]).missing == ["input"]
    assert "Missing some input keys" in str(ChainInputError(["input"]))


@pytest.mark.parametrize("raw", ["-5", "0", "nan"])
def test_non_positive_timeout_falls_back_to_default(raw, caplog):
    with caplog.at_level(logging.WARNING):
        settings = SDKSettings.from_env({"SWITCHBOARD_TIMEOUT_S": raw})

    assert settings.timeout_s == 60.0
    assert "SWITCHBOARD_TIMEOUT_S" in caplog.text
