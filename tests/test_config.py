"""Unit tests for account configuration loading."""

from pathlib import Path

import pytest

from tweetbridge.config import ConfigError, account_settings, load_accounts
from tweetbridge.models import AccountSettings, StripPolicy


class TestLoadAccounts:
    def test_parses_settings(self, tmp_path: Path) -> None:
        path = tmp_path / "accounts.yml"
        path.write_text(
            "accounts:\n"
            "  alice:\n"
            "    strip_html: always\n"
            "    use_groupchat: true\n"
            "  bob:\n"
            "    strip_html: never\n"
        )
        accounts = load_accounts(path)
        assert accounts["alice"].strip_html is StripPolicy.ALWAYS
        assert accounts["alice"].use_groupchat is True
        assert accounts["bob"].strip_html is StripPolicy.NEVER
        assert accounts["bob"].use_groupchat is False

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_accounts(tmp_path / "nope.yml") == {}

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "accounts.yml"
        path.write_text("")
        assert load_accounts(path) == {}

    def test_bad_policy_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "accounts.yml"
        path.write_text("accounts:\n  alice:\n    strip_html: sometimes\n")
        with pytest.raises(ConfigError):
            load_accounts(path)

    def test_unlisted_account_gets_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "accounts.yml"
        path.write_text("accounts:\n  alice:\n    use_groupchat: true\n")
        assert account_settings("zed", path) == AccountSettings()
