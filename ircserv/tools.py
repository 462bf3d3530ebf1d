"""Small text helpers shared by the command handlers."""

from __future__ import annotations

from typing import Callable

FORBIDDEN_CHARACTERS = frozenset("&,*?!@.#$:\"'")


def client_id(nickname: str, username: str, host: str) -> str:
    """Return the ``:nick!user@host`` prefix identifying a client."""
    return f":{nickname}!{username}@{host}"


def erase_early_spaces(text: str) -> str:
    """Drop the leading spaces (only spaces) of ``text``."""
    return text.lstrip(" ")


def parse_first_word(text: str) -> str:
    """Return the first space-delimited word of ``text``, or an empty string."""
    return erase_early_spaces(text).split(" ", 1)[0]


def invalid_characters(text: str) -> bool:
    """Tell whether ``text`` holds a character forbidden in nick and user names."""
    return any(char in FORBIDDEN_CHARACTERS for char in text)


def _scan(message: str, index: int, starts_item: Callable[[str], bool]) -> tuple[list[str], int]:
    """Collect comma-separated items of the first space-delimited field from ``index``."""
    items: list[str] = []
    length = len(message)
    position = index
    while position < length and message[position] == " ":
        position += 1
    while position < length:
        char = message[position]
        if starts_item(char):
            end = position
            while end < length and message[end] not in ", ":
                end += 1
            items.append(message[position:end])
            position = end
        elif char == " ":
            break
        else:
            position += 1
    return items, position


def parse_channels(message: str, index: int = 0) -> tuple[list[str], int]:
    """Parse a comma-separated channel list starting at ``index``.

    Only items beginning with ``#`` or ``&`` are kept. Returns the channel
    names and the position where parsing stopped.
    """
    return _scan(message, index, lambda char: char in "#&")


def parse_args(message: str, index: int = 0) -> tuple[list[str], int]:
    """Parse a comma-separated argument list starting at ``index``.

    Returns the arguments and the position where parsing stopped.
    """
    return _scan(message, index, lambda char: char not in " ,")