"""A connected client: its identity, buffers and command dispatch."""

from __future__ import annotations

import string
from enum import IntEnum
from typing import Any, Callable

from .commands.channels import invite, join, kick, part, quit_, topic
from .commands.info import motd, pong, send_motd, time_
from .commands.messaging import notice, privmsg
from .commands.modes import mode
from .commands.registration import nick, pass_, user
from .message import Message
from .replies import err_unknowncommand, rpl_welcome

_UPPERCASE = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


class ClientStatus(IntEnum):
    """Registration state of a client."""

    NOT_CONNECTED = 0
    CONNECTED = 1


def parse_command(line: str) -> Message | None:
    """Split a protocol line into prefix, command and parameters.

    Returns ``None`` for an empty line. The command is upper-cased (ASCII only).
    """
    if not line:
        return None
    prefix = ""
    command = line
    if line.startswith(":"):
        prefix, space, rest = line.partition(" ")
        if space:
            command = rest
    head, _, text = command.partition(" ")
    return Message(command=head.translate(_UPPERCASE), text=text, prefix=prefix)


def _pass_command(message: str, client: "Client", server: Any) -> None:
    pass_(message, client, server.password, server)


_Handler = Callable[[str, "Client", Any], None]

_COMMANDS: dict[str, _Handler] = {
    "NICK": nick,
    "USER": user,
    "PASS": _pass_command,
    "PING": pong,
    "JOIN": join,
    "QUIT": quit_,
    "PART": part,
    "TOPIC": topic,
    "MOTD": motd,
    "TIME": time_,
    "MODE": mode,
    "INVITE": invite,
    "KICK": kick,
    "PRIVMSG": privmsg,
    "NOTICE": notice,
}


class Client:
    """State of one connection: identity, incoming text and queued replies."""

    def __init__(self, fd: int, hostname: str = "") -> None:
        self.fd = fd
        self.hostname = hostname
        self.nickname = ""
        self.username = ""
        self.incoming = ""
        self.outgoing = ""
        self.status = ClientStatus.NOT_CONNECTED
        self.has_all_info = False
        self.password = False

    def __repr__(self) -> str:
        return f"Client(fd={self.fd}, nickname={self.nickname!r}, status={self.status.name})"

    def feed(self, data: bytes | str) -> None:
        """Append received data; a buffer already holding a full line starts over."""
        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="replace")
        if "\r\n" in self.incoming:
            self.incoming = ""
        self.incoming += data

    def queue(self, text: str) -> None:
        """Queue ``text`` to be sent to the client."""
        self.outgoing += text

    def clear_outgoing(self) -> None:
        """Forget everything queued for sending."""
        self.outgoing = ""

    def split_lines(self) -> list[str]:
        """Take every complete CRLF-terminated line out of the incoming buffer."""
        *lines, rest = self.incoming.split("\r\n")
        self.incoming = rest
        return lines

    def all_info_set(self) -> bool:
        """Tell whether nickname, username and password have all been given."""
        return bool(self.username and self.nickname and self.password)

    def parse_message(self, server: Any) -> bool:
        """Handle every complete line received; return False once the client quits."""
        for line in self.split_lines():
            if self.status == ClientStatus.NOT_CONNECTED:
                if not self.has_all_info:
                    self._fill(line, server)
                    if self.all_info_set():
                        self.has_all_info = True
                if self.has_all_info:
                    self._send_registration(server)
                    self.status = ClientStatus.CONNECTED
                    server.display()
            elif not self._execute(line, server):
                return False
        return True

    def _fill(self, line: str, server: Any) -> None:
        parsed = parse_command(line)
        if parsed is None:
            return
        if parsed.command == "NICK":
            nick(parsed.text, self, server)
        elif parsed.command == "USER":
            user(parsed.text, self, server)
        elif parsed.command == "PASS":
            if pass_(parsed.text, self, server.password, server):
                self.password = True

    def _send_registration(self, server: Any) -> None:
        rpl_welcome(server, self.fd, self.nickname)
        send_motd(self, server)

    def _execute(self, line: str, server: Any) -> bool:
        parsed = parse_command(line)
        if parsed is None:
            return True
        handler = _COMMANDS.get(parsed.command)
        if handler is None:
            err_unknowncommand(server, self.fd, self.nickname, parsed.command)
            return True
        handler(parsed.text, self, server)
        return parsed.command != "QUIT"