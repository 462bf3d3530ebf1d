"""Channel commands: JOIN, PART, TOPIC, INVITE, KICK and QUIT."""

from __future__ import annotations

from typing import Any

from ..channel import Channel
from ..replies import (
    err_badchannelkey,
    err_channelisfull,
    err_chanoprivsneeded,
    err_inviteonlychan,
    err_needmoreparams,
    err_nosuchchannel,
    err_nosuchnick,
    err_notonchannel,
    err_useronchannel,
    err_usernotinchannel,
    rpl_endofnames,
    rpl_inviting,
    rpl_namreply,
    rpl_notopic,
    rpl_topic,
    send_line,
)
from ..tools import (
    client_id,
    erase_early_spaces,
    parse_args,
    parse_channels,
    parse_first_word,
)


def _sender_id(client: Any) -> str:
    return client_id(client.nickname, client.username, client.hostname)


def _trailing(message: str, position: int) -> str:
    """Return the text after ``:`` following ``position``, or an empty string."""
    rest = message[position:].lstrip(" ")
    return rest[1:] if rest.startswith(":") else ""


def _member_list(channel: Channel) -> str:
    """Return the NAMES list of a channel, operators marked with ``@``."""
    return "".join(
        ("@" if channel.is_operator(member.username) else "") + member.nickname + " "
        for member in channel.members.values()
    )


def _send_channel_info(channel: Channel, client: Any, server: Any) -> None:
    """Tell ``client`` it joined, list the members, and announce it to the others."""
    join_line = f"{_sender_id(client)} JOIN {channel.name}"
    send_line(server, client.fd, join_line)
    members = _member_list(channel)
    if channel.topic:
        rpl_topic(server, client.fd, client.nickname, channel.name, channel.topic)
    rpl_namreply(server, client.fd, client.nickname, "=", channel.name, members)
    rpl_endofnames(server, client.fd, client.nickname, channel.name)
    for fd in list(channel.members):
        if fd != client.fd:
            send_line(server, fd, join_line)


def _admit(channel: Channel, client: Any, key: str | None, server: Any) -> bool:
    """Check the channel's limit, key and invite-only modes, in that order."""
    if "l" in channel.modes and len(channel.members) >= channel.limit:
        err_channelisfull(server, client.fd, client.nickname, channel.name)
        return False
    if "k" in channel.modes and (key is None or key != channel.password):
        err_badchannelkey(server, client.fd, client.nickname, channel.name)
        return False
    if "i" in channel.modes and not channel.is_invited(client.username):
        err_inviteonlychan(server, client.fd, client.nickname, channel.name)
        return False
    return True


def join(message: str, client: Any, server: Any) -> None:
    """Handle JOIN: join or create each listed channel, using keys in order."""
    names, position = parse_channels(message, 0)
    if not names:
        err_needmoreparams(server, client.fd, client.nickname, "JOIN")
        return
    keys, _ = parse_args(message, position)
    existing = dict(server.channels)
    for index, name in enumerate(names):
        key = keys[index] if index < len(keys) else None
        channel = existing.get(name)
        if channel is None:
            channel = Channel(name, client)
            server.insert_channel(name, channel)
            _send_channel_info(channel, client, server)
            server.display()
            continue
        if not _admit(channel, client, key, server):
            continue
        channel.add_member(client)
        channel.remove_invited(client.username)
        _send_channel_info(channel, client, server)


def part(message: str, client: Any, server: Any) -> None:
    """Handle PART: leave each listed channel, deleting channels left empty."""
    names, position = parse_channels(message, 0)
    if not names:
        err_needmoreparams(server, client.fd, client.nickname, "PART")
        return
    reason = _trailing(message, position)
    for name in names:
        channel = server.find_channel(name)
        if channel is None:
            err_nosuchchannel(server, client.fd, client.nickname, name)
            continue
        line = f"{_sender_id(client)} PART {channel.name} {reason}"
        if channel.last_client(client):
            send_line(server, client.fd, line)
            server.remove_channel(channel.name)
            server.display()
        elif channel.is_in_channel(client):
            for fd in list(channel.members):
                send_line(server, fd, line)
            channel.remove_member(client)
        else:
            err_notonchannel(server, client.fd, client.nickname, channel.name)


def _change_topic(client: Any, channel: Channel, new_topic: str, server: Any) -> None:
    if "t" in channel.modes and not channel.is_operator(client.username):
        err_chanoprivsneeded(server, client.fd, client.nickname, channel.name)
        return
    if not new_topic.startswith(":"):
        err_needmoreparams(server, client.fd, client.nickname, "TOPIC")
        return
    channel.topic = new_topic[1:]
    for fd, member in list(channel.members.items()):
        rpl_topic(server, fd, member.nickname, channel.name, channel.topic)


def topic(message: str, client: Any, server: Any) -> None:
    """Handle TOPIC: show the topic, or change it when text follows."""
    channel_name = parse_first_word(message)
    if not channel_name:
        err_needmoreparams(server, client.fd, client.nickname, "TOPIC")
        return
    channel = server.find_channel(channel_name)
    if channel is None or not channel.is_in_channel(client):
        err_notonchannel(server, client.fd, client.nickname, channel_name)
        return
    new_topic = erase_early_spaces(message[len(channel_name):])
    if not new_topic:
        if channel.topic:
            rpl_topic(server, client.fd, client.nickname, channel.name, channel.topic)
        else:
            rpl_notopic(server, client.fd, client.nickname, channel.name)
    else:
        _change_topic(client, channel, new_topic, server)


def invite(message: str, client: Any, server: Any) -> None:
    """Handle INVITE: record an invitation and notify the invited client."""
    nickname = parse_first_word(message)
    if not nickname:
        err_needmoreparams(server, client.fd, client.nickname, "INVITE")
        return
    channel_name = parse_first_word(message[message.find(nickname) + len(nickname):])
    if not channel_name:
        err_needmoreparams(server, client.fd, client.nickname, "INVITE")
        return
    target = server.find_client(nickname)
    if target is None:
        err_nosuchnick(server, client.fd, client.nickname, nickname)
        return
    channel = server.find_channel(channel_name)
    if channel is None:
        err_nosuchchannel(server, client.fd, client.nickname, channel_name)
    elif not channel.is_in_channel(client):
        err_notonchannel(server, client.fd, client.nickname, channel_name)
    elif "i" in channel.modes and not channel.is_operator(client.username):
        err_chanoprivsneeded(server, client.fd, client.nickname, channel_name)
    elif channel.is_in_channel(target):
        err_useronchannel(server, client.fd, client.nickname, channel_name, nickname)
    else:
        if not channel.is_invited(target.username):
            channel.add_invited(target.username)
        rpl_inviting(server, client.fd, client.nickname, channel_name, nickname)
        send_line(server, target.fd, f"{_sender_id(client)} INVITE {nickname} {channel_name}")


def kick(message: str, client: Any, server: Any) -> None:
    """Handle KICK: an operator removes a member; the creator cannot be kicked."""
    channel_name = parse_first_word(message)
    if not channel_name:
        # The reply has always named INVITE here.
        err_needmoreparams(server, client.fd, client.nickname, "INVITE")
        return
    rest = message[message.find(channel_name) + len(channel_name):]
    nickname = parse_first_word(rest)
    if not nickname:
        err_needmoreparams(server, client.fd, client.nickname, "INVITE")
        return
    target = server.find_client(nickname)
    if target is None:
        err_nosuchnick(server, client.fd, client.nickname, nickname)
        return
    channel = server.find_channel(channel_name)
    if channel is None:
        err_nosuchchannel(server, client.fd, client.nickname, channel_name)
    elif not channel.is_in_channel(client):
        err_notonchannel(server, client.fd, client.nickname, channel_name)
    elif not channel.is_operator(client.username):
        err_chanoprivsneeded(server, client.fd, client.nickname, channel_name)
    elif not channel.is_in_channel(target):
        err_usernotinchannel(server, client.fd, client.nickname, channel_name, nickname)
    elif target.username != channel.operators[0]:
        rest = rest[rest.find(nickname) + len(nickname):]
        colon = rest.find(":")
        reason = "" if colon == -1 else rest[colon + 1:]
        line = f"{_sender_id(client)} KICK {channel_name} {nickname} {reason}"
        for fd in list(channel.members):
            send_line(server, fd, line)
        channel.remove_member(target)


def quit_(message: str, client: Any, server: Any) -> None:
    """Handle QUIT: leave every channel, telling the remaining members."""
    colon = message.find(":")
    reason = "" if colon == -1 else message[colon + 1:]
    line = f"{_sender_id(client)} QUIT {reason}"
    for name in sorted(server.channels):
        channel = server.find_channel(name)
        if channel is None:
            continue
        if channel.last_client(client):
            server.remove_channel(name)
        elif channel.is_in_channel(client):
            for fd in list(channel.members):
                if fd != client.fd:
                    send_line(server, fd, line)
            channel.remove_member(client)