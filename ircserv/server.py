"""The listening server: accepts connections and routes their lines."""

from __future__ import annotations

import selectors
import socket
import sys
import threading
from typing import Any

from .channel import Channel
from .client import Client

try:
    import resource
except ImportError:  # pragma: no cover - platforms without resource limits
    resource = None  # type: ignore[assignment]

BUFFER_SIZE = 1024
_POLL_INTERVAL = 0.5
_HEADER = "FD        Nickname        Username        Host        Status"


class ServerError(RuntimeError):
    """Raised when a socket operation of the server fails."""


class Server:
    """Holds clients and channels and serves them over TCP."""

    def __init__(self, port: str, password: str) -> None:
        self.port = str(port)
        self.password = password
        self.clients: dict[int, Client] = {}
        self.channels: dict[str, Channel] = {}
        self.max_fd: int | None = None
        self.address: tuple[Any, ...] | None = None
        self._listener: socket.socket | None = None
        self._selector: selectors.BaseSelector | None = None
        self._sockets: dict[int, socket.socket] = {}
        self._stop_event = threading.Event()

    def __enter__(self) -> "Server":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def launch(self) -> None:
        """Open, bind and listen on the server socket."""
        if resource is not None:
            try:
                self.max_fd = resource.getrlimit(resource.RLIMIT_NOFILE)[0]
            except (OSError, ValueError) as exc:
                raise ServerError("Error: getrlimit()") from exc
        try:
            infos = socket.getaddrinfo(
                None, self.port, socket.AF_INET, socket.SOCK_STREAM,
                socket.IPPROTO_TCP, socket.AI_PASSIVE,
            )
        except (socket.gaierror, UnicodeError) as exc:
            raise ServerError("Error: getaddrinfo()") from exc
        family, socktype, proto, _, address = infos[0]
        try:
            listener = socket.socket(family, socktype, proto)
        except OSError as exc:
            raise ServerError("Error: socket()") from exc
        steps = (
            ("setsockopt", lambda: listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)),
            ("bind", lambda: listener.bind(address)),
            ("listen", lambda: listener.listen(socket.SOMAXCONN)),
        )
        for name, step in steps:
            try:
                step()
            except OSError as exc:
                listener.close()
                raise ServerError(f"Error: {name}()") from exc
        self._listener = listener
        self.address = listener.getsockname()
        self._selector = selectors.DefaultSelector()
        self._selector.register(listener, selectors.EVENT_READ)

    def loop(self) -> None:
        """Serve clients until :meth:`stop` is called."""
        if self._listener is None or self._selector is None:
            raise ServerError("Error: server not launched")
        listener_fd = self._listener.fileno()
        while not self._stop_event.is_set():
            self._update_interest()
            try:
                ready = self._selector.select(timeout=_POLL_INTERVAL)
            except OSError as exc:
                raise ServerError("Error server: poll") from exc
            if not ready:
                continue
            events = {key.fd: mask for key, mask in ready}
            if listener_fd in events:
                self._add_client()
                continue
            for fd in sorted(events):
                if fd not in self.clients:
                    continue
                mask = events[fd]
                if mask & selectors.EVENT_READ and not self._client_message(fd):
                    break
                if mask & selectors.EVENT_WRITE:
                    self._send_pending(fd)

    def stop(self) -> None:
        """Ask the loop to end at its next turn."""
        self._stop_event.set()

    def close(self) -> None:
        """Close every connection and the listening socket."""
        for sock in self._sockets.values():
            sock.close()
        self._sockets.clear()
        self.clients.clear()
        self.channels.clear()
        if self._selector is not None:
            self._selector.close()
            self._selector = None
        if self._listener is not None:
            self._listener.close()
            self._listener = None

    def remove_client(self, fd: int) -> None:
        """Forget the client on ``fd`` and close its connection."""
        self.clients.pop(fd, None)
        sock = self._sockets.pop(fd, None)
        if sock is None:
            return
        if self._selector is not None:
            try:
                self._selector.unregister(sock)
            except (KeyError, ValueError):
                pass
        sock.close()

    def remove_client_from_channels(self, client: Client) -> None:
        """Take ``client`` out of every channel, deleting channels it was alone in."""
        for name in sorted(self.channels):
            channel = self.channels.get(name)
            if channel is None:
                continue
            if channel.last_client(client):
                self.remove_channel(name)
            elif channel.is_in_channel(client):
                channel.remove_member(client)

    def remove_channel(self, name: str) -> None:
        """Delete the channel called ``name``, if any."""
        self.channels.pop(name, None)

    def insert_channel(self, name: str, channel: Channel) -> None:
        """Add a channel; an existing channel of that name is kept."""
        self.channels.setdefault(name, channel)

    def find_channel(self, name: str) -> Channel | None:
        """Return the channel called ``name``, or ``None``."""
        return self.channels.get(name)

    def find_client(self, nickname: str) -> Client | None:
        """Return the first client, by descriptor, using ``nickname``."""
        for _, client in sorted(self.clients.items()):
            if client.nickname == nickname:
                return client
        return None

    def status_report(self) -> str:
        """Return the text of the console status screen."""
        lines = ["Welcome to IRC Server", "", f"Channels: {len(self.channels)}"]
        lines.extend(channel.name for _, channel in sorted(self.channels.items()))
        lines.extend(["", _HEADER])
        for fd, client in sorted(self.clients.items()):
            gap = " " * (9 if fd < 10 else 8)
            state = "CONNECTED" if client.status else "NOT CONNECTED"
            lines.append(
                f"{fd}{gap}{client.nickname.ljust(16)}{client.username.ljust(16)}"
                f"{client.hostname.ljust(12)}{state}"
            )
        return "\n" * 10 + "\n".join(lines) + "\n"

    def display(self) -> None:
        """Print the status screen."""
        sys.stdout.write(self.status_report())
        sys.stdout.flush()

    def _update_interest(self) -> None:
        assert self._selector is not None
        for fd, sock in self._sockets.items():
            client = self.clients.get(fd)
            wanted = selectors.EVENT_READ
            if client is not None and client.outgoing:
                wanted |= selectors.EVENT_WRITE
            if self._selector.get_key(sock).events != wanted:
                self._selector.modify(sock, wanted)

    def _add_client(self) -> None:
        assert self._listener is not None and self._selector is not None
        if self.max_fd is not None and len(self.clients) == self.max_fd:
            try:
                self._listener.shutdown(socket.SHUT_RD)
            except OSError as exc:
                raise ServerError("Error: shutdown()") from exc
        try:
            conn, peer = self._listener.accept()
        except OSError as exc:
            raise ServerError("Error: accept()") from exc
        conn.setblocking(False)
        try:
            hostname = socket.getnameinfo(peer[:2], socket.NI_NUMERICSERV)[0]
        except OSError as exc:
            conn.close()
            raise ServerError("Error: getnameinfo()") from exc
        fd = conn.fileno()
        self.clients[fd] = Client(fd, hostname)
        self._sockets[fd] = conn
        self._selector.register(conn, selectors.EVENT_READ)

    def _client_message(self, fd: int) -> bool:
        client = self.clients[fd]
        try:
            data = self._sockets[fd].recv(BUFFER_SIZE)
        except BlockingIOError:
            return True
        except OSError as exc:
            raise ServerError("Error: recv()") from exc
        if not data:
            self.remove_client_from_channels(client)
            self.remove_client(fd)
            self.display()
            return False
        client.feed(data)
        if "\r\n" in client.incoming and not client.parse_message(self):
            self.remove_client(fd)
            self.display()
            return False
        return True

    def _send_pending(self, fd: int) -> None:
        client = self.clients[fd]
        if not client.outgoing:
            return
        try:
            self._sockets[fd].send(client.outgoing.encode("utf-8"))
        except BlockingIOError:
            return
        except OSError as exc:
            raise ServerError("Error: send()") from exc
        client.clear_outgoing()