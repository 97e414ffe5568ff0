"""Mail envelope passed through the redirect composer."""

from dataclasses import dataclass
from email.message import EmailMessage, Message
from email.policy import default as default_policy

from .mime import header_text


@dataclass
class Mail:
    """A message together with the processing state that travels with it.

    The composer reads the original Mail and only ever mutates the message
    of the target Mail it is given.
    """

    message: Message
    error_message: str | None = None  # Failure reason recorded by an upstream stage
    name: str = ""

    @property
    def subject(self) -> str | None:
        return header_text(self.message, "Subject")

    @classmethod
    def new(cls, name: str = "") -> "Mail":
        """Create a Mail around an empty message, ready to be composed into."""
        return cls(message=EmailMessage(policy=default_policy), name=name)
