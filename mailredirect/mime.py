"""Helpers for reading and rendering MIME messages."""

import email
import email.message
import logging
from email import errors
from email.header import decode_header
from email.message import MIMEPart
from email.policy import EmailPolicy
from email.policy import default as default_policy
from pathlib import Path

from .errors import RenderError

logger = logging.getLogger("mailredirect")

_BASE64_DEFECTS = (
    errors.InvalidBase64CharactersDefect,
    errors.InvalidBase64PaddingDefect,
    errors.InvalidBase64LengthDefect,
)


def decode_mime_header(header: str | None) -> str:
    """Decode a MIME-encoded email header."""
    if header is None:
        return ""
    decoded_parts = decode_header(str(header))
    result = []
    for part, charset in decoded_parts:
        if isinstance(part, bytes):
            result.append(part.decode(charset or "utf-8", errors="replace"))
        else:
            result.append(part)
    return "".join(result)


def header_text(message: email.message.Message, name: str) -> str | None:
    """Return the decoded value of a header, or None when it is missing.

    Messages with a modern policy already decode headers on access; only
    compat32 messages still carry RFC 2047 encoded words.
    """
    value = message.get(name)
    if value is None:
        return None
    if isinstance(message.policy, EmailPolicy):
        return str(value)
    return decode_mime_header(value)


def parse_message(raw: bytes) -> email.message.EmailMessage:
    """Parse raw RFC 822 bytes into a message."""
    return email.message_from_bytes(raw, policy=default_policy)


def load_message(path: str | Path) -> email.message.EmailMessage:
    """Read and parse a message stored as a single .eml file."""
    path = Path(path)
    return parse_message(path.read_bytes())


def render_headers(message: email.message.Message) -> str:
    """Render every header line of a message as text, in stored order.

    Folded values keep their continuation lines.
    """
    return "\n".join(f"{name}: {value}" for name, value in message.raw_items())


def _is_attachment(part: email.message.Message) -> bool:
    disposition = str(part.get("Content-Disposition", ""))
    return "attachment" in disposition.lower()


def _find_text_part(message: email.message.Message) -> email.message.Message | None:
    """Find the part holding the readable body, preferring text/plain over text/html."""
    if not message.is_multipart():
        return message
    for content_type in ("text/plain", "text/html"):
        for part in message.walk():
            if part.is_multipart() or _is_attachment(part):
                continue
            if part.get_content_type() == content_type:
                return part
    return None


def render_body(message: email.message.Message) -> str:
    """Return the decoded text of a message body.

    Multipart messages render their first inline text/plain part, falling
    back to text/html.

    Raises:
        RenderError: If there is no text part, the transfer encoding is
            corrupt, or the charset cannot decode the payload.
    """
    part = _find_text_part(message)
    if part is None:
        raise RenderError("Message has no textual body")
    if part.get_content_maintype() != "text":
        raise RenderError(f"Message body is not text ({part.get_content_type()})")

    known_defects = len(part.defects)
    payload = part.get_payload(decode=True)
    if any(isinstance(d, _BASE64_DEFECTS) for d in part.defects[known_defects:]):
        raise RenderError("Message body has a corrupt base64 transfer encoding")
    if not isinstance(payload, bytes):
        raise RenderError("Message body has no payload")

    charset = part.get_content_charset() or "utf-8"
    try:
        return payload.decode(charset)
    except (LookupError, UnicodeError) as e:
        raise RenderError(f"Cannot decode message body as {charset}: {e}") from e


def detect_linesep(message: email.message.Message) -> str:
    """Guess the line separator a parsed message was stored with."""
    for part in message.walk():
        if any("\r\n" in str(value) for _, value in part.raw_items()):
            return "\r\n"
        payload = None if part.is_multipart() else part.get_payload()
        if isinstance(payload, str) and "\r\n" in payload:
            return "\r\n"
    return "\n"


def text_part(text: str, disposition: str, filename: str | None = None) -> MIMEPart:
    """Build a text/plain part whose content is exactly ``text``.

    Unlike set_content(), no line separator is appended to the text.
    """
    part = MIMEPart(policy=default_policy)
    part.set_payload(text, "utf-8")
    del part["MIME-Version"]
    part["Content-Disposition"] = disposition
    if filename is not None:
        set_filename(part, filename)
    return part


def set_filename(part: email.message.Message, filename: str) -> None:
    """Set the Content-Disposition file name of a part.

    Names that look like RFC 2047 encoded words are stored RFC 2231 encoded,
    otherwise reading them back would decode them a second time.
    """
    charset = "utf-8" if "=?" in filename else None
    part.set_param("filename", filename, header="Content-Disposition", charset=charset)
