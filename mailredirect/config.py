"""Configuration management for mailredirect."""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

logger = logging.getLogger("mailredirect")

_TRUE_VALUES = ("1", "true", "yes", "on")


class InlineMode(str, Enum):
    """How much of the original message goes into the inline text body.

    MESSAGE and UNALTERED add nothing inline; they behave like NONE here.
    """
    NONE = "none"
    HEADS = "heads"
    BODY = "body"
    ALL = "all"
    MESSAGE = "message"
    UNALTERED = "unaltered"

    @classmethod
    def parse(cls, value: "str | InlineMode") -> "InlineMode":
        return _parse_mode(cls, value)


class AttachmentMode(str, Enum):
    """How much of the original message is attached to the new one.

    NONE produces no attachment at all.
    """
    NONE = "none"
    HEADS = "heads"
    BODY = "body"
    ALL = "all"
    MESSAGE = "message"
    UNALTERED = "unaltered"

    @classmethod
    def parse(cls, value: "str | AttachmentMode") -> "AttachmentMode":
        return _parse_mode(cls, value)


def _parse_mode(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, Enum):
        value = value.value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"Invalid {enum_cls.__name__} '{value}' (expected one of: {choices})") from None


@dataclass(frozen=True)
class RedirectPolicy:
    """How a redirected message is composed from the original one."""
    inline_mode: InlineMode = InlineMode.BODY
    attachment_mode: AttachmentMode = AttachmentMode.NONE
    attach_error: bool = False
    debug: bool = False
    message_text: str | None = None  # Prefixed to the inline body


@dataclass
class RedirectConfig:
    """Redirect policy settings.

    The message text and debug flag can be overridden via environment:
    - MAILREDIRECT_MESSAGE: text prefixed to the inline body
    - MAILREDIRECT_DEBUG: "1", "true" or "yes" enables debug logging
    """
    inline: InlineMode = InlineMode.BODY
    attachment: AttachmentMode = AttachmentMode.NONE
    attach_error: bool = False
    debug: bool = False
    message: str | None = None
    subject: str | None = None  # Replacement subject, None keeps the original

    def __post_init__(self):
        """Normalize modes and load overrides from environment variables."""
        self.inline = InlineMode.parse(self.inline)
        self.attachment = AttachmentMode.parse(self.attachment)

        env_message = os.environ.get("MAILREDIRECT_MESSAGE")
        env_debug = os.environ.get("MAILREDIRECT_DEBUG")

        if env_message:
            self.message = env_message
        if env_debug:
            self.debug = env_debug.strip().lower() in _TRUE_VALUES


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class Config:
    redirect: RedirectConfig = field(default_factory=RedirectConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_policy(self) -> RedirectPolicy:
        """Build the immutable policy used for a single composition."""
        return RedirectPolicy(
            inline_mode=self.redirect.inline,
            attachment_mode=self.redirect.attachment,
            attach_error=self.redirect.attach_error,
            debug=self.redirect.debug,
            message_text=self.redirect.message,
        )


def load_config(path: str | Path) -> Config:
    """Load configuration from a TOML file."""
    path = Path(path)
    with path.open("rb") as f:
        data = tomllib.load(f)

    redirect_data = data.get("redirect", {})
    redirect_config = RedirectConfig(
        inline=redirect_data.get("inline", InlineMode.BODY),
        attachment=redirect_data.get("attachment", AttachmentMode.NONE),
        attach_error=redirect_data.get("attach_error", False),
        debug=redirect_data.get("debug", False),
        message=redirect_data.get("message"),
        subject=redirect_data.get("subject"),
    )

    logging_data = data.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
    )

    logger.debug(f"Loaded configuration from {path}")
    return Config(
        redirect=redirect_config,
        logging=logging_config,
    )
