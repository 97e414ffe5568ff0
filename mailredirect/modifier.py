"""In-place modifications of a message's headers."""

import email.message


def replace_subject(message: email.message.Message, new_subject: str | None) -> None:
    """Replace the Subject header when a new subject is supplied.

    With ``new_subject`` set to None the message is left untouched.
    """
    if new_subject is None:
        return
    if "Subject" in message:
        message.replace_header("Subject", new_subject)
    else:
        message["Subject"] = new_subject
