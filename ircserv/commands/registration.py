"""Registration commands: NICK, USER and PASS."""

from __future__ import annotations

from typing import Any

from ..replies import (
    err_alreadyregistred,
    err_erroneusnickname,
    err_needmoreparams,
    err_nonicknamegiven,
    err_passwdmismatch,
)
from ..replies import send_line
from ..tools import client_id, invalid_characters, parse_first_word

MAX_NAME_LENGTH = 13


def _unique_name(name: str, taken: set[str]) -> str:
    """Truncate ``name`` and append 2, 3, ... until it is not in ``taken``."""
    base = name[:MAX_NAME_LENGTH]
    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}{suffix}"
        suffix += 1
    return candidate


def _others(client: Any, server: Any) -> list[Any]:
    return [other for other in server.clients.values() if other.fd != client.fd]


def nick(message: str, client: Any, server: Any) -> None:
    """Handle NICK: validate, make unique and announce the new nickname."""
    nickname = parse_first_word(message)
    if not nickname:
        err_nonicknamegiven(server, client.fd, client.nickname)
        return
    if invalid_characters(nickname):
        err_erroneusnickname(server, client.fd, client.nickname, nickname)
        return
    old_nickname = client.nickname
    taken = {other.nickname for other in _others(client, server)}
    nickname = _unique_name(nickname, taken)
    client.nickname = nickname
    send_line(
        server,
        client.fd,
        f"{client_id(old_nickname, client.username, client.hostname)} NICK {nickname}",
    )
    if client.status:
        server.display()


def user(message: str, client: Any, server: Any) -> None:
    """Handle USER: set a unique username once."""
    username = parse_first_word(message)
    if client.username:
        err_alreadyregistred(server, client.fd, client.nickname)
    elif not username:
        err_needmoreparams(server, client.fd, client.nickname, "USER")
    elif not invalid_characters(username):
        taken = {other.username for other in _others(client, server)}
        client.username = _unique_name(username, taken)


def pass_(message: str, client: Any, password: str, server: Any) -> bool:
    """Handle PASS; return whether the client may count as authenticated."""
    given = parse_first_word(message)
    if client.password:
        err_alreadyregistred(server, client.fd, client.nickname)
        return True
    if not given:
        err_needmoreparams(server, client.fd, client.nickname, "PASS")
        return False
    if given != password:
        err_passwdmismatch(server, client.fd, client.nickname)
        return False
    return True