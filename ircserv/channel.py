"""Channel state: members, operators, invitations and modes."""

from __future__ import annotations

from typing import Any


class Channel:
    """A chat channel.

    Members are kept in a dict keyed by socket descriptor, ordered by
    descriptor. Operators and invitations are lists of usernames, in the
    order they were added; the first operator is the channel's creator.
    """

    def __init__(self, name: str, creator: Any) -> None:
        self.name = name
        self.topic = ""
        self.modes = "t"
        self.password = ""
        self.limit = 0
        self.operators: list[str] = [creator.username]
        self.members: dict[int, Any] = {creator.fd: creator}
        self.invited: list[str] = []

    def __repr__(self) -> str:
        return f"Channel(name={self.name!r}, modes={self.modes!r}, members={len(self.members)})"

    def is_operator(self, user: str) -> bool:
        """Tell whether ``user`` is an operator of the channel."""
        return user in self.operators

    def last_client(self, client: Any) -> bool:
        """Tell whether ``client`` is the only member left."""
        return len(self.members) == 1 and self.is_in_channel(client)

    def is_in_channel(self, client: Any) -> bool:
        """Tell whether ``client`` itself is a member."""
        return any(member is client for member in self.members.values())

    def is_invited(self, user: str) -> bool:
        """Tell whether ``user`` holds an invitation."""
        return user in self.invited

    def remove_member(self, client: Any) -> None:
        """Remove the member sitting on ``client``'s descriptor, if any."""
        self.members.pop(client.fd, None)

    def remove_invited(self, user: str) -> None:
        """Withdraw the first invitation held by ``user``, if any."""
        if user in self.invited:
            self.invited.remove(user)

    def add_member(self, client: Any) -> None:
        """Add ``client``; a descriptor already present keeps its member."""
        if client.fd in self.members:
            return
        self.members[client.fd] = client
        self.members = dict(sorted(self.members.items()))

    def add_invited(self, user: str) -> None:
        """Record an invitation for ``user``."""
        self.invited.append(user)

    def unset_mode(self, mode: str) -> None:
        """Remove the first occurrence of the mode letter ``mode``."""
        position = self.modes.find(mode)
        if position != -1:
            self.modes = self.modes[:position] + self.modes[position + 1:]

    def add_mode(self, mode: str) -> None:
        """Append the mode letter ``mode``."""
        self.modes += mode

    def add_operator(self, user: str) -> None:
        """Make ``user`` an operator."""
        self.operators.append(user)

    def remove_operator(self, user: str) -> None:
        """Remove the first operator entry for ``user``, if any."""
        if user in self.operators:
            self.operators.remove(user)