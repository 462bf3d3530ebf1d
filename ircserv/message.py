"""A parsed protocol line."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Message:
    """A command line split into prefix, command and parameters."""

    command: str = ""
    text: str = ""
    prefix: str = ""
    destinations: list[int] = field(default_factory=list)

    def add_dest(self, fd: int) -> None:
        """Add a destination descriptor."""
        self.destinations.append(fd)