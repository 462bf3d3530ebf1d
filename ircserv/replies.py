"""Numeric replies and error messages queued for clients.

Each function queues one line on the client found at descriptor ``fd`` in
``server.clients``; ``name`` is the nickname the reply is addressed to.
"""

from __future__ import annotations

import time
from typing import Any

SERVER_NAME = "ircserv"


def send_numeric(server: Any, fd: int, text: str) -> None:
    """Queue ``text`` with the server prefix and a CRLF terminator."""
    server.clients[fd].queue(f":{SERVER_NAME} {text}\r\n")


def send_line(server: Any, fd: int, text: str) -> None:
    """Queue ``text`` as is, with a CRLF terminator."""
    server.clients[fd].queue(f"{text}\r\n")


def rpl_welcome(server: Any, fd: int, name: str) -> None:
    send_numeric(server, fd, f"001 {name} :Welcome {name} to the Internet Chat Relay!")


def rpl_channelmodeis(server: Any, fd: int, name: str, channel: str, mode: str, mode_param: str) -> None:
    send_numeric(server, fd, f"324 {name} {channel} {mode} {mode_param}")


def rpl_notopic(server: Any, fd: int, name: str, channel: str) -> None:
    send_numeric(server, fd, f"331 {name} {channel} :No topic is set")


def rpl_topic(server: Any, fd: int, name: str, channel: str, topic: str) -> None:
    send_numeric(server, fd, f"332 {name} {channel} :{topic}")


def rpl_inviting(server: Any, fd: int, name: str, channel: str, input_name: str) -> None:
    send_numeric(server, fd, f"341 {name} {channel} {input_name}")


def rpl_namreply(server: Any, fd: int, name: str, symbol: str, channel: str, members: str) -> None:
    send_numeric(server, fd, f"353 {name} {symbol} {channel} :{members}")


def rpl_endofnames(server: Any, fd: int, name: str, channel: str) -> None:
    send_numeric(server, fd, f"366 {name} {channel} :End of /NAMES list")


def rpl_motd(server: Any, fd: int, name: str, line: str) -> None:
    send_numeric(server, fd, f"372 {name} : {line}")


def rpl_motdstart(server: Any, fd: int, name: str) -> None:
    send_numeric(server, fd, f"375 {name} :- {SERVER_NAME} Message of the day - ")


def rpl_endofmotd(server: Any, fd: int, name: str) -> None:
    send_numeric(server, fd, f"376 {name} :End of MOTD command")


def rpl_time(server: Any, fd: int, name: str) -> None:
    date_string = time.strftime("%c", time.localtime())
    send_numeric(server, fd, f"391 {name} {SERVER_NAME} :{date_string}")


def err_nosuchnick(server: Any, fd: int, name: str, input_name: str) -> None:
    send_numeric(server, fd, f"401 {name} {input_name} :No such nick/channel")


def err_nosuchserver(server: Any, fd: int, name: str, server_name: str) -> None:
    send_numeric(server, fd, f"402 {name} {server_name} :No such server")


def err_nosuchchannel(server: Any, fd: int, name: str, channel: str) -> None:
    send_numeric(server, fd, f"403 {name} {channel} :No such channel")


def err_cannotsendtochan(server: Any, fd: int, name: str, channel: str) -> None:
    send_numeric(server, fd, f"404 {name} {channel} :Cannot send to channel")


def err_toomanychannels(server: Any, fd: int, name: str, channel: str) -> None:
    send_numeric(server, fd, f"405 {name} {channel} :You have joined too many channels")


def err_norecipient(server: Any, fd: int, name: str, cmd: str) -> None:
    send_numeric(server, fd, f"411 {name} :No recipient given ({cmd})")


def err_notexttosend(server: Any, fd: int, name: str) -> None:
    send_numeric(server, fd, f"412 {name} :No text to send")


def err_unknowncommand(server: Any, fd: int, name: str, cmd: str) -> None:
    # The server has always sent this reply with the 461 code.
    send_numeric(server, fd, f"461 {name} {cmd} :Unknown command")


def err_nomotd(server: Any, fd: int, name: str) -> None:
    send_numeric(server, fd, f"422 {name} :MOTD File is missing")


def err_nonicknamegiven(server: Any, fd: int, name: str) -> None:
    send_numeric(server, fd, f"431 {name} :No nickname given")


def err_erroneusnickname(server: Any, fd: int, name: str, bad_name: str) -> None:
    send_numeric(server, fd, f"432 {name} {bad_name} :Erroneous nickname")


def err_nicknameinuse(server: Any, fd: int, name: str, bad_name: str) -> None:
    send_numeric(server, fd, f"433 {name} {bad_name} :Nickname is already in use")


def err_usernotinchannel(server: Any, fd: int, name: str, channel: str, input_name: str) -> None:
    send_numeric(server, fd, f"441 {name} {input_name} {channel} :They aren't on that channel")


def err_notonchannel(server: Any, fd: int, name: str, channel: str) -> None:
    send_numeric(server, fd, f"442 {name} {channel} :You're not on that channel")


def err_useronchannel(server: Any, fd: int, name: str, channel: str, input_name: str) -> None:
    send_numeric(server, fd, f"443 {name} {input_name} {channel} :is already on channel")


def err_needmoreparams(server: Any, fd: int, name: str, cmd: str) -> None:
    send_numeric(server, fd, f"461 {name} {cmd} :Not enough parameters")


def err_alreadyregistred(server: Any, fd: int, name: str) -> None:
    send_numeric(server, fd, f"462 {name} :Unauthorized command (already registered)")


def err_passwdmismatch(server: Any, fd: int, name: str) -> None:
    send_numeric(server, fd, f"464 {name} :Password incorrect")


def err_channelisfull(server: Any, fd: int, name: str, channel: str) -> None:
    send_numeric(server, fd, f"471 {name} {channel} :Cannot join channel (+l)")


def err_unknownmode(server: Any, fd: int, name: str, channel: str, mode: str) -> None:
    send_numeric(server, fd, f"472 {name} {mode} :is unknown mode char to me for {channel}")


def err_inviteonlychan(server: Any, fd: int, name: str, channel: str) -> None:
    send_numeric(server, fd, f"473 {name} {channel} :Cannot join channel (+i)")


def err_badchannelkey(server: Any, fd: int, name: str, channel: str) -> None:
    send_numeric(server, fd, f"475 {name} {channel} :Cannot join channel (+k)")


def err_chanoprivsneeded(server: Any, fd: int, name: str, channel: str) -> None:
    send_numeric(server, fd, f"482 {name} {channel} :You're not channel operator")


def err_invalidkey(server: Any, fd: int, name: str, channel: str) -> None:
    send_numeric(server, fd, f"525 {name} {channel} :Key is not well-formed")


def err_invalidmodeparam(server: Any, fd: int, name: str, channel: str, mode: str, param: str) -> None:
    send_numeric(server, fd, f"696 {name} {channel} {mode} {param} :limit must only contained digit")