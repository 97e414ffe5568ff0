"""Inline text body of a redirected message."""

import email.message
import logging

from ..config import InlineMode, RedirectPolicy
from ..errors import RenderError
from ..mime import render_body

logger = logging.getLogger("mailredirect")

LINE_BREAK = "\n"
BODY_UNAVAILABLE = "body unavailable"


def render_body_or_placeholder(message: email.message.Message) -> str:
    """Render the body of ``message``, or a placeholder when it cannot be decoded."""
    try:
        return render_body(message)
    except RenderError as e:
        logger.warning(f"Original body unavailable: {e}")
        return BODY_UNAVAILABLE


def _headers_block(headers_text: str) -> list[str]:
    return ["Message Headers:", LINE_BREAK, headers_text, LINE_BREAK]


def _body_block(original: email.message.Message) -> list[str]:
    return ["Message:", LINE_BREAK, render_body_or_placeholder(original), LINE_BREAK]


def compose_inline_text(
    policy: RedirectPolicy,
    headers_text: str,
    original: email.message.Message,
) -> str:
    """Build the text shown inline in the redirected message.

    The policy's message text comes first, followed by the original headers
    and/or body as selected by ``policy.inline_mode``. MESSAGE and UNALTERED
    add nothing beyond the message text.

    Args:
        policy: Redirect policy
        headers_text: Original headers rendered as text
        original: Original message, read for its body

    Returns:
        The inline text, possibly empty
    """
    fragments: list[str] = []
    if policy.message_text is not None:
        fragments += [policy.message_text, LINE_BREAK]

    mode = policy.inline_mode
    if policy.debug:
        logger.info(f"inline: {mode.value}")

    if mode is InlineMode.ALL:
        fragments += _headers_block(headers_text)
        fragments += _body_block(original)
    elif mode is InlineMode.HEADS:
        fragments += _headers_block(headers_text)
    elif mode is InlineMode.BODY:
        fragments += _body_block(original)
    elif mode in (InlineMode.NONE, InlineMode.MESSAGE, InlineMode.UNALTERED):
        pass

    return "".join(fragments)
