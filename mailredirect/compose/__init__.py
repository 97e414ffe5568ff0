"""Redirected message composition.

Builds the content of a new message out of an original one:
- headers: copy Date, From, Reply-To, To, Subject and Return-Path lines
- text: inline body with optional message text, original headers and body
- attachments: the original as headers, body, both or message/rfc822, plus
  an optional "Reasons" part with the original error message

Use alter_message() to compose a target mail in one step.
"""

from .alter import CompositionRequest, alter_message, build_inline_part, new_container
from .attachments import (
    ERROR_FILENAME,
    NO_SUBJECT,
    attachment_filename,
    build_attachment,
    build_error_part,
)
from .headers import RELEVANT_HEADERS, copy_headers, relevant_headers
from .text import BODY_UNAVAILABLE, compose_inline_text, render_body_or_placeholder

__all__ = [
    "BODY_UNAVAILABLE",
    "CompositionRequest",
    "ERROR_FILENAME",
    "NO_SUBJECT",
    "RELEVANT_HEADERS",
    "alter_message",
    "attachment_filename",
    "build_attachment",
    "build_error_part",
    "build_inline_part",
    "compose_inline_text",
    "copy_headers",
    "new_container",
    "relevant_headers",
    "render_body_or_placeholder",
]
