"""Messaging commands: PRIVMSG and NOTICE."""

from __future__ import annotations

from typing import Any

from ..replies import err_norecipient, err_nosuchnick, err_notexttosend, send_line
from ..tools import client_id, parse_args


def _sender_id(client: Any) -> str:
    return client_id(client.nickname, client.username, client.hostname)


def _send_to_channel(
    verb: str, name: str, client: Any, server: Any, text: str, operators_only: bool
) -> bool:
    """Deliver ``text`` to a channel's members; return whether the channel exists."""
    channel = server.channels.get(name)
    if channel is None:
        return False
    line = f"{_sender_id(client)} {verb} {channel.name} {text}"
    for fd, member in list(channel.members.items()):
        if fd == client.fd:
            continue
        if operators_only and not channel.is_operator(member.username):
            continue
        send_line(server, fd, line)
    return True


def _send_to_client(verb: str, nickname: str, client: Any, server: Any, text: str) -> bool:
    """Deliver ``text`` to the first client named ``nickname``; return whether found."""
    for fd, other in sorted(server.clients.items()):
        if other.nickname == nickname:
            send_line(server, fd, f"{_sender_id(client)} {verb} {nickname} {text}")
            return True
    return False


def _parse(message: str) -> tuple[list[str], str | None]:
    """Split a message into its targets and its text, or ``None`` without text."""
    targets, position = parse_args(message, 0)
    rest = message[position:].lstrip(" ")
    text = rest[1:] if rest.startswith(":") else None
    return targets, text


def _deliver(verb: str, targets: list[str], text: str, client: Any, server: Any, report: bool) -> None:
    for target in targets:
        if target[:1] in ("#", "&"):
            found = _send_to_channel(verb, target, client, server, text, False)
            name = target
        elif target[:1] == "@" and target[1:2] in ("#", "&"):
            name = target[1:]
            found = _send_to_channel(verb, name, client, server, text, True)
        else:
            name = target
            found = _send_to_client(verb, target, client, server, text)
        if not found and report:
            err_nosuchnick(server, client.fd, client.nickname, name)


def privmsg(message: str, client: Any, server: Any) -> None:
    """Handle PRIVMSG to nicknames, channels and channel operators (``@#chan``)."""
    targets, text = _parse(message)
    if not targets:
        err_norecipient(server, client.fd, client.nickname, "PRIVMSG")
        return
    if text is None:
        err_notexttosend(server, client.fd, client.nickname)
        return
    _deliver("PRIVMSG", targets, text, client, server, report=True)


def notice(message: str, client: Any, server: Any) -> None:
    """Handle NOTICE: like PRIVMSG but never answers with an error."""
    targets, text = _parse(message)
    if not targets or text is None:
        return
    _deliver("NOTICE", targets, text, client, server, report=False)