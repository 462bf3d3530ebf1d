"""Informational commands: PING, TIME and MOTD."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator

from ..replies import (
    err_nomotd,
    err_nosuchserver,
    rpl_endofmotd,
    rpl_motd,
    rpl_motdstart,
    rpl_time,
    send_line,
    SERVER_NAME,
)
from ..tools import client_id

MOTD_PATH = Path("config") / "motd.config"


def _read_lines(path: Path) -> list[str]:
    """Read ``path`` line by line, dropping only the newline characters."""
    with open(path, encoding="utf-8", errors="replace", newline="") as handle:
        return list(_strip_newlines(handle))


def _strip_newlines(lines: Iterator[str]) -> Iterator[str]:
    for line in lines:
        yield line[:-1] if line.endswith("\n") else line


def send_motd(client: Any, server: Any, path: Path | str = MOTD_PATH) -> None:
    """Send the message of the day from ``path``, or 422 if it cannot be read."""
    try:
        lines = _read_lines(Path(path))
    except OSError:
        err_nomotd(server, client.fd, client.nickname)
        return
    rpl_motdstart(server, client.fd, client.nickname)
    for line in lines:
        rpl_motd(server, client.fd, client.nickname, line)
    rpl_endofmotd(server, client.fd, client.nickname)


def pong(message: str, client: Any, server: Any) -> None:
    """Answer PING addressed to this server with PONG."""
    if message == SERVER_NAME:
        send_line(
            server,
            client.fd,
            f"{client_id(client.nickname, client.username, client.hostname)} PONG {message}",
        )
    else:
        err_nosuchserver(server, client.fd, client.nickname, message)


def time_(message: str, client: Any, server: Any) -> None:
    """Answer TIME with the server's local time."""
    if message and message != SERVER_NAME:
        err_nosuchserver(server, client.fd, client.nickname, message)
        return
    rpl_time(server, client.fd, client.nickname)


def motd(message: str, client: Any, server: Any) -> None:
    """Answer MOTD with the message of the day."""
    if message and message != SERVER_NAME:
        err_nosuchserver(server, client.fd, client.nickname, message)
        return
    send_motd(client, server)