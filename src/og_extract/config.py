from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

from .content import ContentFormat
from .engine import GroupMode
from .http_client import DEFAULT_USER_AGENT

ENV_PREFIX = "OG_EXTRACT_"


def _env(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class ExtractConfig:
    timeout_s: float = 45
    max_retries: int = 4
    backoff_base_s: float = 1.0
    user_agent: str = DEFAULT_USER_AGENT
    group_mode: GroupMode = GroupMode.FIRST
    content_format: ContentFormat = ContentFormat.TEXT

    def __post_init__(self) -> None:
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be positive")
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.backoff_base_s < 0:
            raise ValueError("backoff_base_s must be >= 0")
        # Accept plain strings from env/CLI.
        object.__setattr__(self, "group_mode", GroupMode(self.group_mode))
        object.__setattr__(self, "content_format", ContentFormat(self.content_format))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ExtractConfig:
        """Read ``OG_EXTRACT_*`` variables; unset ones keep their defaults."""
        environ = os.environ if environ is None else environ
        cfg = cls()

        timeout = _env(environ, "TIMEOUT")
        if timeout is not None:
            cfg = replace(cfg, timeout_s=float(timeout))
        retries = _env(environ, "MAX_RETRIES")
        if retries is not None:
            cfg = replace(cfg, max_retries=int(retries))
        backoff = _env(environ, "BACKOFF")
        if backoff is not None:
            cfg = replace(cfg, backoff_base_s=float(backoff))
        user_agent = _env(environ, "USER_AGENT")
        if user_agent is not None:
            cfg = replace(cfg, user_agent=user_agent)
        group_mode = _env(environ, "GROUP_MODE")
        if group_mode is not None:
            cfg = replace(cfg, group_mode=GroupMode(group_mode.lower()))
        content_format = _env(environ, "CONTENT_FORMAT")
        if content_format is not None:
            cfg = replace(cfg, content_format=ContentFormat(content_format.lower()))
        return cfg
