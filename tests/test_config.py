"""Tests for config module."""

from dataclasses import FrozenInstanceError

import pytest

from mailredirect.config import (
    AttachmentMode,
    Config,
    InlineMode,
    RedirectConfig,
    RedirectPolicy,
    load_config,
)


class TestModes:
    def test_parse_is_case_insensitive(self):
        assert InlineMode.parse("HEADS") is InlineMode.HEADS
        assert AttachmentMode.parse(" Message ") is AttachmentMode.MESSAGE

    def test_parse_passes_through_members(self):
        assert InlineMode.parse(InlineMode.ALL) is InlineMode.ALL

    def test_modes_are_independent(self):
        assert AttachmentMode.parse(InlineMode.BODY) is AttachmentMode.BODY
        assert InlineMode.BODY is not AttachmentMode.BODY

    def test_parse_invalid(self):
        with pytest.raises(ValueError, match="Invalid InlineMode"):
            InlineMode.parse("everything")

    def test_same_cases(self):
        assert [m.value for m in InlineMode] == [m.value for m in AttachmentMode]


class TestRedirectPolicy:
    def test_defaults(self):
        policy = RedirectPolicy()
        assert policy.inline_mode is InlineMode.BODY
        assert policy.attachment_mode is AttachmentMode.NONE
        assert policy.attach_error is False
        assert policy.debug is False
        assert policy.message_text is None

    def test_frozen(self):
        policy = RedirectPolicy()
        with pytest.raises(FrozenInstanceError):
            policy.debug = True


class TestRedirectConfig:
    def test_string_modes_are_parsed(self):
        config = RedirectConfig(inline="all", attachment="heads")
        assert config.inline is InlineMode.ALL
        assert config.attachment is AttachmentMode.HEADS

    def test_env_message(self, monkeypatch):
        monkeypatch.setenv("MAILREDIRECT_MESSAGE", "From the environment")
        config = RedirectConfig(message="From the file")
        assert config.message == "From the environment"

    @pytest.mark.parametrize("value,expected", [("1", True), ("yes", True), ("TRUE", True), ("0", False), ("no", False)])
    def test_env_debug(self, monkeypatch, value, expected):
        monkeypatch.setenv("MAILREDIRECT_DEBUG", value)
        assert RedirectConfig(debug=not expected).debug is expected


class TestLoadConfig:
    def test_load_config(self, sample_config_toml):
        config = load_config(sample_config_toml)

        assert config.redirect.inline is InlineMode.ALL
        assert config.redirect.attachment is AttachmentMode.MESSAGE
        assert config.redirect.attach_error is True
        assert config.redirect.debug is False
        assert config.redirect.message == "Your message could not be delivered."
        assert config.redirect.subject == "Undeliverable: Quarterly report"
        assert config.logging.level == "DEBUG"

    def test_to_policy(self, sample_config_toml):
        policy = load_config(sample_config_toml).to_policy()
        assert policy == RedirectPolicy(
            inline_mode=InlineMode.ALL,
            attachment_mode=AttachmentMode.MESSAGE,
            attach_error=True,
            debug=False,
            message_text="Your message could not be delivered.",
        )

    def test_empty_file_uses_defaults(self, temp_dir):
        path = temp_dir / "empty.toml"
        path.write_text("")
        config = load_config(path)
        assert config.redirect.inline is InlineMode.BODY
        assert config.redirect.subject is None
        assert config.logging.level == "INFO"

    def test_invalid_mode(self, temp_dir):
        path = temp_dir / "bad.toml"
        path.write_text('[redirect]\ninline = "sideways"\n')
        with pytest.raises(ValueError):
            load_config(path)

    def test_load_config_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_config(temp_dir / "nonexistent.toml")

    def test_default_config(self):
        assert Config().to_policy() == RedirectPolicy()
