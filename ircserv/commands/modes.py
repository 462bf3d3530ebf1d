"""Channel mode command: MODE with the i, t, o, l and k modes."""

from __future__ import annotations

from typing import Any

from ..replies import (
    err_chanoprivsneeded,
    err_invalidkey,
    err_invalidmodeparam,
    err_needmoreparams,
    err_nosuchchannel,
    err_notonchannel,
    err_usernotinchannel,
    rpl_channelmodeis,
    send_line,
)
from ..tools import client_id

_DIGITS = frozenset("0123456789")
_ALNUM = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789")


def _take_word(text: str) -> tuple[str, str]:
    """Split off the first space-delimited word after leading spaces."""
    word, _, rest = text.lstrip(" ").partition(" ")
    return word, rest


def _broadcast(channel: Any, client: Any, server: Any, change: str) -> None:
    """Announce a mode change to every member of ``channel``."""
    sender = client_id(client.nickname, client.username, client.hostname)
    line = f"{sender} MODE {channel.name} {change}"
    for fd in list(channel.members):
        send_line(server, fd, line)


def _find_member(channel: Any, nickname: str) -> Any | None:
    return next(
        (member for member in channel.members.values() if member.nickname == nickname),
        None,
    )


def parse_mode(mode: str, param: str) -> list[str]:
    """Split a mode string into ``"<sign><letter>[ <arg>]"`` entries.

    ``+l``, ``+k`` and both ``+o`` and ``-o`` take their argument, in order,
    from the space-separated ``param``.
    """
    entries: list[str] = []
    sign = ""
    args_position = 0
    position = 0
    while position < len(mode):
        while position < len(mode) and mode[position] in "+-":
            sign = mode[position]
            position += 1
        if position >= len(mode):
            return entries
        letter = mode[position]
        arg = ""
        if (sign == "+" and letter in "lk") or letter == "o":
            end = param.find(" ", args_position)
            if end == -1:
                arg = param[args_position:]
                args_position = len(param)
            else:
                arg = param[args_position:end]
                args_position = end + 1
        entry = sign + letter
        if arg:
            entry += " " + arg
        entries.append(entry)
        position += 1
    return entries


def _check_request(target: str, client: Any, server: Any, mode: str, param: str) -> bool:
    """Send the reply for a request that is not a change; return whether one was sent."""
    channel = server.channels.get(target)
    if channel is None:
        err_nosuchchannel(server, client.fd, client.nickname, target)
        return True
    if client.fd not in channel.members:
        err_notonchannel(server, client.fd, client.nickname, target)
        return True
    if not mode or mode[0] not in "+-":
        if param:
            mode = f"{mode} {param}"
        rpl_channelmodeis(server, client.fd, client.nickname, target, channel.modes, mode)
        return True
    if not channel.is_operator(client.username):
        err_chanoprivsneeded(server, client.fd, client.nickname, target)
        return True
    return False


def _execute(entries: list[str], target: str, client: Any, server: Any) -> None:
    for entry in entries:
        change = entry[:2]
        arg = entry[3:]
        if len(change) < 2 or change[0] not in "+-":
            continue
        letter = change[1]
        if letter in "it":
            mode_invite_or_topic(target, client, server, change)
        elif letter == "o":
            mode_operator(target, client, server, change, arg)
        elif letter == "l":
            mode_limit(target, client, server, change, arg)
        elif letter == "k":
            mode_key(target, client, server, change, arg)


def mode(message: str, client: Any, server: Any) -> None:
    """Handle MODE: show or change the modes of a channel."""
    target, rest = _take_word(message)
    mode_string, rest = _take_word(rest)
    param = rest.lstrip(" ")
    if not target:
        err_needmoreparams(server, client.fd, client.nickname, "MODE")
        return
    if target == client.nickname or mode_string == "b":
        return
    if _check_request(target, client, server, mode_string, param):
        return
    _execute(parse_mode(mode_string, param), target, client, server)


def mode_invite_or_topic(target: str, client: Any, server: Any, mode: str) -> None:
    """Set or clear the invite-only (``i``) or topic-lock (``t``) mode."""
    channel = server.channels.get(target)
    if channel is None or len(mode) < 2:
        return
    sign, letter = mode[0], mode[1]
    if sign == "+":
        if letter in channel.modes:
            return
        channel.add_mode(letter)
    elif sign == "-":
        if letter not in channel.modes:
            return
        channel.unset_mode(letter)
    else:
        return
    _broadcast(channel, client, server, f"{sign}{letter}")


def mode_operator(target: str, client: Any, server: Any, mode: str, arg: str) -> None:
    """Give (``+o``) or take (``-o``) operator rights; the creator keeps them."""
    if not arg:
        err_needmoreparams(server, client.fd, client.nickname, f"MODE {mode}")
        return
    channel = server.channels.get(target)
    if channel is None or mode[:1] not in ("+", "-"):
        return
    member = _find_member(channel, arg)
    if member is None:
        err_usernotinchannel(server, client.fd, client.nickname, channel.name, arg)
        return
    if mode[0] == "+":
        if channel.is_operator(member.username):
            return
        channel.add_operator(member.username)
    else:
        if not channel.is_operator(member.username):
            return
        if member.username == channel.operators[0]:
            return
        channel.remove_operator(member.username)
    _broadcast(channel, client, server, f"{mode[0]}o {arg}")


def mode_limit(target: str, client: Any, server: Any, mode: str, arg: str) -> None:
    """Set (``+l <n>``) or clear (``-l``) the member limit."""
    channel = server.channels.get(target)
    if mode[:1] == "+":
        if not arg:
            err_needmoreparams(server, client.fd, client.nickname, f"MODE {mode}")
            return
        if any(char not in _DIGITS for char in arg):
            err_invalidmodeparam(server, client.fd, client.nickname, target, mode, arg)
            return
        if channel is None:
            return
        limit = int(arg)
        if "l" not in channel.modes:
            channel.add_mode("l")
        channel.limit = limit
        _broadcast(channel, client, server, f"+l {limit}")
    elif mode[:1] == "-":
        if channel is None or "l" not in channel.modes:
            return
        channel.unset_mode("l")
        channel.limit = 0
        _broadcast(channel, client, server, "-l ")


def mode_key(target: str, client: Any, server: Any, mode: str, arg: str) -> None:
    """Set (``+k <key>``) or clear (``-k``) the channel key."""
    channel = server.channels.get(target)
    if mode[:1] == "+":
        if not arg:
            err_needmoreparams(server, client.fd, client.nickname, f"MODE {mode}")
            return
        if any(char not in _ALNUM for char in arg):
            err_invalidkey(server, client.fd, client.nickname, target)
            return
        if channel is None:
            return
        if "k" not in channel.modes:
            channel.add_mode("k")
        channel.password = arg
        _broadcast(channel, client, server, f"+k {arg}")
    elif mode[:1] == "-":
        if channel is None or "k" not in channel.modes:
            return
        channel.unset_mode("k")
        channel.password = ""
        _broadcast(channel, client, server, "-k ")