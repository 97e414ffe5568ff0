"""Compose redirected and bounced email messages from an original message."""

__version__ = "0.1.0"
