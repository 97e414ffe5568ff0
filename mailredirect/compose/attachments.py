"""Attachment parts of a redirected message."""

import copy
import email.message
import logging
from email.message import MIMEPart
from email.policy import default as default_policy

from ..config import AttachmentMode, RedirectPolicy
from ..mail import Mail
from ..mime import header_text, set_filename, text_part
from .text import LINE_BREAK, render_body_or_placeholder

logger = logging.getLogger("mailredirect")

NO_SUBJECT = "No Subject"
ERROR_FILENAME = "Reasons"


def attachment_filename(subject: str | None) -> str:
    """File name for the attached original: its trimmed subject, or "No Subject"."""
    if subject is not None and subject.strip():
        return subject.strip()
    return NO_SUBJECT


def build_attachment(
    policy: RedirectPolicy,
    headers_text: str,
    original: email.message.Message,
) -> MIMEPart | None:
    """Build the attachment carrying the original message.

    Content depends on ``policy.attachment_mode``:
    - HEADS: the original headers as text
    - BODY: the original body text
    - ALL: headers, then a "Message:" label and the body text
    - MESSAGE: the whole original as message/rfc822
    - UNALTERED: file name and disposition only, without content
    - NONE: no attachment, returns None

    An undecodable body is replaced by "body unavailable".
    """
    mode = policy.attachment_mode
    if mode is AttachmentMode.NONE:
        return None

    filename = attachment_filename(header_text(original, "Subject"))

    if mode is AttachmentMode.HEADS:
        return text_part(headers_text, "attachment", filename)
    if mode is AttachmentMode.BODY:
        return text_part(render_body_or_placeholder(original), "attachment", filename)
    if mode is AttachmentMode.ALL:
        text = "".join([
            headers_text, LINE_BREAK,
            "Message:", LINE_BREAK,
            render_body_or_placeholder(original),
        ])
        return text_part(text, "attachment", filename)

    part = MIMEPart(policy=default_policy)
    if mode is AttachmentMode.MESSAGE:
        # Embedded by copy; serializing the new message must not touch the original
        part.set_content(copy.deepcopy(original), disposition="attachment")
    elif mode is AttachmentMode.UNALTERED:
        part["Content-Disposition"] = "attachment"
    set_filename(part, filename)
    return part


def build_error_part(original: Mail) -> MIMEPart:
    """Build the "Reasons" attachment holding the original mail's error message."""
    return text_part(original.error_message, "attachment", ERROR_FILENAME)
