"""Settings read from the environment (and a .env file, loaded by the CLI)."""

from __future__ import annotations

import getpass
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_USER_NAME = "player"
DEFAULT_PROMPT_SYMBOL = "> "

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    """User settings for the console game."""

    user_name: str = DEFAULT_USER_NAME
    prompt_symbol: str = DEFAULT_PROMPT_SYMBOL
    bot_delay: bool = True
    log_level: str = "WARNING"


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Ignoring %s=%r, expected a boolean", name, raw)
    return default


def _default_user_name() -> str:
    try:
        return getpass.getuser() or DEFAULT_USER_NAME
    except (KeyError, OSError):
        return DEFAULT_USER_NAME


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from UNO_* environment variables.

    - UNO_USER_NAME: name of the human player (defaults to the OS login name)
    - UNO_PROMPT_SYMBOL: console prompt
    - UNO_BOT_DELAY: pause before reporting bot moves
    - UNO_LOG_LEVEL: logging level name
    """
    env = os.environ if environ is None else environ
    user_name = env.get("UNO_USER_NAME", "").strip() or _default_user_name()
    return Settings(
        user_name=user_name,
        prompt_symbol=env.get("UNO_PROMPT_SYMBOL") or DEFAULT_PROMPT_SYMBOL,
        bot_delay=_parse_bool("UNO_BOT_DELAY", env.get("UNO_BOT_DELAY"), True),
        log_level=(env.get("UNO_LOG_LEVEL") or "WARNING").strip().upper(),
    )
