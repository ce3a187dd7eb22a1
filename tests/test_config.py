from __future__ import annotations

import pytest

from og_extract.config import ExtractConfig
from og_extract.content import ContentFormat
from og_extract.engine import GroupMode


def test_defaults() -> None:
    cfg = ExtractConfig.from_env({})
    assert cfg == ExtractConfig()
    assert cfg.group_mode is GroupMode.FIRST
    assert cfg.content_format is ContentFormat.TEXT


def test_from_env_reads_prefixed_variables() -> None:
    cfg = ExtractConfig.from_env(
        {
            "OG_EXTRACT_TIMEOUT": "5",
            "OG_EXTRACT_MAX_RETRIES": "0",
            "OG_EXTRACT_BACKOFF": "0.5",
            "OG_EXTRACT_USER_AGENT": "bot/2",
            "OG_EXTRACT_GROUP_MODE": "ADVANCE",
            "OG_EXTRACT_CONTENT_FORMAT": "markdown",
            "OG_EXTRACT_UNUSED": "x",
        }
    )
    assert cfg.timeout_s == 5.0
    assert cfg.max_retries == 0
    assert cfg.backoff_base_s == 0.5
    assert cfg.user_agent == "bot/2"
    assert cfg.group_mode is GroupMode.ADVANCE
    assert cfg.content_format is ContentFormat.MARKDOWN


def test_blank_variables_are_ignored() -> None:
    assert ExtractConfig.from_env({"OG_EXTRACT_TIMEOUT": "  "}) == ExtractConfig()


def test_plain_strings_are_normalized() -> None:
    cfg = ExtractConfig(group_mode="advance", content_format="markdown")  # type: ignore[arg-type]
    assert cfg.group_mode is GroupMode.ADVANCE
    assert cfg.content_format is ContentFormat.MARKDOWN


@pytest.mark.parametrize(
    "environ",
    [
        {"OG_EXTRACT_TIMEOUT": "soon"},
        {"OG_EXTRACT_TIMEOUT": "0"},
        {"OG_EXTRACT_MAX_RETRIES": "-1"},
        {"OG_EXTRACT_GROUP_MODE": "all"},
        {"OG_EXTRACT_CONTENT_FORMAT": "pdf"},
    ],
)
def test_invalid_values_raise(environ: dict[str, str]) -> None:
    with pytest.raises(ValueError):
        ExtractConfig.from_env(environ)
