"""Centralised configuration loaded from environment variables, dotenv and YAML."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from tweetbridge.models import AccountSettings

load_dotenv()

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised for missing credentials or an invalid accounts file."""


# ── Paths ──────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# ── Credentials ────────────────────────────────────────────────────────────
USER: str = os.getenv("TWEETBRIDGE_USER", "")
PASSWORD: str = os.getenv("TWEETBRIDGE_PASSWORD", "")

# ── API / transport ────────────────────────────────────────────────────────
API_BASE: str = os.getenv("TWEETBRIDGE_API_BASE", "https://twitter.com").rstrip("/")
HTTP_TIMEOUT: float = float(os.getenv("TWEETBRIDGE_HTTP_TIMEOUT", "30"))
POLL_INTERVAL: float = float(os.getenv("TWEETBRIDGE_POLL_INTERVAL", "60"))

# ── Delivery ───────────────────────────────────────────────────────────────
WRAP_WIDTH = 425

ACCOUNTS_FILE: Path = Path(
    os.getenv("TWEETBRIDGE_ACCOUNTS", str(PROJECT_ROOT / "config" / "accounts.yml"))
)

# ── Endpoints ──────────────────────────────────────────────────────────────
FRIENDS_IDS_PATH = "/friends/ids.xml"
HOME_TIMELINE_PATH = "/statuses/home_timeline.xml"
SHOW_FRIENDS_PATH = "/statuses/friends.xml"
STATUS_UPDATE_PATH = "/statuses/update.xml"
DIRECT_MESSAGES_NEW_PATH = "/direct_messages/new.xml"


def require_credentials() -> tuple[str, str]:
    """Return ``(user, password)`` or raise if either is unset."""
    if not USER or not PASSWORD:
        raise ConfigError(
            "TWEETBRIDGE_USER and TWEETBRIDGE_PASSWORD are required but were empty."
        )
    return USER, PASSWORD


def load_accounts(path: Path | None = None) -> dict[str, AccountSettings]:
    """Parse the accounts YAML file into per-account delivery settings.

    The file looks like::

        accounts:
          alice:
            strip_html: always
            use_groupchat: true
    """
    accounts_path = path or ACCOUNTS_FILE
    if not accounts_path.exists():
        logger.warning("Accounts file not found, using defaults: %s", accounts_path)
        return {}

    with open(accounts_path) as fh:
        cfg: dict[str, Any] = yaml.safe_load(fh) or {}

    raw_accounts: dict[str, Any] = cfg.get("accounts", {}) or {}
    settings: dict[str, AccountSettings] = {}
    for name, raw in raw_accounts.items():
        try:
            settings[str(name)] = AccountSettings.model_validate(raw or {})
        except ValidationError as exc:
            raise ConfigError(f"Invalid settings for account '{name}': {exc}") from exc
    logger.debug("Loaded settings for %d accounts from %s", len(settings), accounts_path)
    return settings


def account_settings(name: str, path: Path | None = None) -> AccountSettings:
    """Settings for *name*, falling back to defaults when it is not listed."""
    return load_accounts(path).get(name, AccountSettings())
