"""Compose the body of a redirected message from the original mail."""

import email.message
import logging
import uuid
from dataclasses import dataclass
from email.message import MIMEPart
from email.policy import Policy
from email.policy import default as default_policy

from ..config import AttachmentMode, RedirectPolicy
from ..errors import CompositionError, MissingFieldError
from ..mail import Mail
from ..mime import detect_linesep, render_headers, text_part
from .attachments import build_attachment, build_error_part
from .headers import copy_headers
from .text import compose_inline_text

logger = logging.getLogger("mailredirect")

_CONTENT_HEADERS = ("Content-Type", "Content-Transfer-Encoding", "Content-Disposition")


def new_container(subtype: str) -> MIMEPart:
    """Create an empty multipart container with its boundary already fixed."""
    container = MIMEPart(policy=default_policy)
    boundary = f"=_mailredirect_{uuid.uuid4().hex}"
    if subtype == "mixed":
        container.make_mixed(boundary=boundary)
    elif subtype == "alternative":
        container.make_alternative(boundary=boundary)
    else:
        raise ValueError(f"Unsupported multipart subtype: {subtype}")
    return container


def build_inline_part(text: str) -> MIMEPart:
    return text_part(text, "inline")


@dataclass
class StagedBody:
    """Everything written into the target, prepared before it is touched."""
    policy: Policy
    headers: list[tuple[str, str]]
    parts: list[MIMEPart]


def stage_body(
    original: email.message.Message,
    target: email.message.Message,
    container: MIMEPart,
) -> StagedBody:
    """Parse the target's new content headers and pick its line separator.

    The target inherits the original's line separator so an embedded
    message/rfc822 copy serializes with the original's bytes.
    """
    policy = target.policy
    linesep = detect_linesep(original)
    if policy.linesep != linesep:
        policy = policy.clone(linesep=linesep)
    headers = [policy.header_store_parse("Content-Type", str(container["Content-Type"]))]
    if "MIME-Version" not in target:
        headers.append(policy.header_store_parse("MIME-Version", "1.0"))
    return StagedBody(policy=policy, headers=headers, parts=container.get_payload())


def install_body(
    original: email.message.Message,
    target: email.message.Message,
    staged: StagedBody,
) -> None:
    """Write a staged body into ``target``; nothing here parses or can reject a value."""
    copy_headers(original, target)
    for name in _CONTENT_HEADERS:
        del target[name]
    for name, value in staged.headers:
        target.set_raw(name, value)
    target.set_payload(staged.parts)
    target.policy = staged.policy


@dataclass(frozen=True)
class CompositionRequest:
    """A single redirect composition: what to read, what to write, and how.

    All three fields are mandatory; a missing one raises MissingFieldError
    when the request is created.
    """
    original: Mail | None = None
    target: Mail | None = None
    policy: RedirectPolicy | None = None

    def __post_init__(self):
        for field_name in ("original", "target", "policy"):
            if getattr(self, field_name) is None:
                raise MissingFieldError(field_name)
        if self.original.message is self.target.message:
            raise ValueError("original and target must be distinct messages")

    def build_body(self, headers_text: str) -> MIMEPart:
        """Build the complete multipart/mixed body without touching the target."""
        policy = self.policy
        original = self.original.message

        alternative = new_container("alternative")
        alternative.attach(build_inline_part(compose_inline_text(policy, headers_text, original)))

        mixed = new_container("mixed")
        mixed.attach(alternative)

        if policy.debug:
            logger.info(f"attachmentType: {policy.attachment_mode.value}")
        if policy.attachment_mode is not AttachmentMode.NONE:
            mixed.attach(build_attachment(policy, headers_text, original))

        if policy.attach_error and self.original.error_message is not None:
            mixed.attach(build_error_part(self.original))

        return mixed

    def apply(self) -> None:
        """Write the composed headers and body into the target message.

        Raises:
            CompositionError: If the body cannot be built or its headers
                cannot be prepared for the target. The target is left
                unchanged in both cases.
        """
        original = self.original.message
        target = self.target.message

        headers_text = render_headers(original)
        try:
            mixed = self.build_body(headers_text)
        except Exception as e:
            raise CompositionError("Unable to create multipart body") from e

        try:
            staged = stage_body(original, target, mixed)
        except Exception as e:
            raise CompositionError("Unable to set multipart body on target message") from e

        install_body(original, target, staged)

        logger.debug(
            f"Composed redirect of {self.original.name or 'mail'}: "
            f"{len(mixed.get_payload())} body parts"
        )


def alter_message(policy: RedirectPolicy, original: Mail, target: Mail) -> None:
    """Rewrite ``target`` as a redirect of ``original`` according to ``policy``."""
    CompositionRequest(original=original, target=target, policy=policy).apply()
