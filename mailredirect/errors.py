"""Exception types raised while composing redirected messages."""


class RedirectError(Exception):
    """Base class for mailredirect errors."""
    pass


class RenderError(RedirectError):
    """The body of a message could not be decoded to text."""
    pass


class CompositionError(RedirectError):
    """The multipart body of a redirected message could not be built."""
    pass


class MissingFieldError(RedirectError, ValueError):
    """A composition request was created without a mandatory field."""

    def __init__(self, field_name: str):
        super().__init__(f"'{field_name}' is mandatory")
        self.field_name = field_name
