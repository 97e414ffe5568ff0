"""Carry selected header lines from an original message to a new one."""

import email.message

# Header lines worth keeping on a redirected message
RELEVANT_HEADERS = ("Date", "From", "Reply-To", "To", "Subject", "Return-Path")


def relevant_headers(
    original: email.message.Message,
    names: tuple[str, ...] = RELEVANT_HEADERS,
) -> list[tuple[str, str]]:
    """Return the raw (name, value) header lines of ``original`` matching ``names``.

    Matching is case-insensitive and lines come back in the order the
    original message stores them, folding included.
    """
    wanted = {name.lower() for name in names}
    return [(name, value) for name, value in original.raw_items() if name.lower() in wanted]


def copy_headers(
    original: email.message.Message,
    target: email.message.Message,
    names: tuple[str, ...] = RELEVANT_HEADERS,
) -> None:
    """Append the matching header lines of ``original`` to ``target``.

    Existing headers on ``target`` are neither replaced nor deduplicated;
    a copied line with the same name is simply added after them.
    """
    for name, value in relevant_headers(original, names):
        target.set_raw(name, value)
