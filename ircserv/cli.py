"""Command line entry point of the server."""

from __future__ import annotations

import signal
import sys

from .server import Server, ServerError

USAGE = "Error usage: ircserv <port> <password>"


def check_password(password: str) -> bool:
    """Tell whether ``password`` is usable: not empty and without spaces."""
    return bool(password) and " " not in password


def main(argv: list[str] | None = None) -> int:
    """Run the server: ``<port> <password>``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print(USAGE, file=sys.stderr)
        return 1
    port, password = args
    if not check_password(password):
        print("Error usage: <password> must not contain spaces or be empty", file=sys.stderr)
        return 1
    server = Server(port, password)
    server.display()
    handler = lambda signum, frame: server.stop()  # noqa: E731
    signals = [signal.SIGINT]
    if hasattr(signal, "SIGQUIT"):
        signals.append(signal.SIGQUIT)
    previous = {signum: signal.signal(signum, handler) for signum in signals}
    try:
        server.launch()
        server.loop()
        return 0
    except ServerError as exc:
        print(exc, file=sys.stderr)
        return 1
    finally:
        server.close()
        for signum, old in previous.items():
            signal.signal(signum, old)


if __name__ == "__main__":
    sys.exit(main())