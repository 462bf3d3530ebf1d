from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from ircserv.commands.channels import invite, join, kick, part, quit_, topic


@dataclass
class FakeClient:
    fd: int
    nickname: str
    username: str
    hostname: str = "127.0.0.1"
    status: bool = True
    sent: list[str] = field(default_factory=list)

    def queue(self, text: str) -> None:
        self.sent.append(text)


class FakeServer:
    def __init__(self) -> None:
        self.clients: dict[int, FakeClient] = {}
        self.channels: dict = {}
        self.displays = 0

    def add(self, client: FakeClient) -> FakeClient:
        self.clients[client.fd] = client
        return client

    def display(self) -> None:
        self.displays += 1

    def insert_channel(self, name, channel) -> None:
        self.channels.setdefault(name, channel)

    def remove_channel(self, name) -> None:
        self.channels.pop(name, None)

    def find_channel(self, name):
        return self.channels.get(name)

    def find_client(self, nickname):
        for _, client in sorted(self.clients.items()):
            if client.nickname == nickname:
                return client
        return None


def take(client: FakeClient) -> list[str]:
    lines = [line[:-2] for line in client.sent]
    assert all(line.endswith("\r\n") for line in client.sent)
    client.sent.clear()
    return lines


@pytest.fixture
def server():
    srv = FakeServer()
    srv.add(FakeClient(4, "alice", "alice"))
    srv.add(FakeClient(5, "bob", "bob"))
    srv.add(FakeClient(6, "carol", "carol"))
    return srv


def joined(server, *names):
    for name in names:
        join("#chan", server.clients_by_nick(name) if False else server.find_client(name), server)
    for client in server.clients.values():
        client.sent.clear()
    return server.channels["#chan"]


def test_join_creates_channel(server):
    alice = server.find_client("alice")
    join("#chan", alice, server)
    channel = server.channels["#chan"]
    assert channel.operators == ["alice"]
    assert list(channel.members) == [4]
    assert server.displays == 1
    assert take(alice) == [
        ":alice!alice@127.0.0.1 JOIN #chan",
        ":ircserv 353 alice = #chan :@alice ",
        ":ircserv 366 alice #chan :End of /NAMES list",
    ]


def test_join_without_channel(server):
    alice = server.find_client("alice")
    join("chan", alice, server)
    assert server.channels == {}
    assert take(alice) == [":ircserv 461 alice JOIN :Not enough parameters"]


def test_join_existing_channel_announces(server):
    joined(server, "alice")
    bob = server.find_client("bob")
    join("#chan", bob, server)
    assert take(bob)[1] == ":ircserv 353 bob = #chan :@alice bob "
    assert take(server.find_client("alice")) == [":bob!bob@127.0.0.1 JOIN #chan"]
    assert server.channels["#chan"].is_in_channel(bob)


def test_join_shows_topic(server):
    channel = joined(server, "alice")
    channel.topic = "news"
    bob = server.find_client("bob")
    join("#chan", bob, server)
    assert ":ircserv 332 bob #chan :news" in take(bob)


def test_join_key_mode(server):
    channel = joined(server, "alice")
    channel.modes += "k"
    channel.password = "secret"
    bob = server.find_client("bob")
    join("#chan placeholder", bob, server)
    assert take(bob) == [":ircserv 475 bob #chan :Cannot join channel (+k)"]
    assert not channel.is_in_channel(bob)
    join("#chan secret", bob, server)
    assert channel.is_in_channel(bob)


def test_join_invite_only(server):
    channel = joined(server, "alice")
    channel.modes += "i"
    bob = server.find_client("bob")
    join("#chan", bob, server)
    assert take(bob) == [":ircserv 473 bob #chan :Cannot join channel (+i)"]
    channel.add_invited("bob")
    join("#chan", bob, server)
    assert channel.is_in_channel(bob)
    assert channel.invited == []


def test_join_limit(server):
    channel = joined(server, "alice")
    channel.modes += "l"
    channel.limit = 1
    bob = server.find_client("bob")
    join("#chan", bob, server)
    assert take(bob) == [":ircserv 471 bob #chan :Cannot join channel (+l)"]
    assert list(channel.members) == [4]


def test_part_last_client_removes_channel(server):
    joined(server, "alice")
    alice = server.find_client("alice")
    part("#chan :bye", alice, server)
    assert "#chan" not in server.channels
    assert take(alice) == [":alice!alice@127.0.0.1 PART #chan bye"]


def test_part_broadcasts_and_removes(server):
    channel = joined(server, "alice", "bob")
    bob = server.find_client("bob")
    part("#chan :later", bob, server)
    assert not channel.is_in_channel(bob)
    assert take(server.find_client("alice")) == take(bob)


def test_part_errors(server):
    joined(server, "alice")
    bob = server.find_client("bob")
    part("#chan,#none", bob, server)
    assert take(bob) == [
        ":ircserv 442 bob #chan :You're not on that channel",
        ":ircserv 403 bob #none :No such channel",
    ]
    part("", bob, server)
    assert take(bob) == [":ircserv 461 bob PART :Not enough parameters"]


def test_topic_show_and_set(server):
    channel = joined(server, "alice", "bob")
    alice = server.find_client("alice")
    bob = server.find_client("bob")
    topic("#chan", alice, server)
    assert take(alice) == [":ircserv 331 alice #chan :No topic is set"]
    topic("#chan :hello world", alice, server)
    assert channel.topic == "hello world"
    assert take(bob) == [":ircserv 332 bob #chan :hello world"]
    assert take(alice) == [":ircserv 332 alice #chan :hello world"]


def test_topic_errors(server):
    channel = joined(server, "alice", "bob")
    alice = server.find_client("alice")
    bob = server.find_client("bob")
    topic("#chan :x", bob, server)
    assert take(bob) == [":ircserv 482 bob #chan :You're not channel operator"]
    topic("#chan hello", alice, server)
    assert take(alice) == [":ircserv 461 alice TOPIC :Not enough parameters"]
    topic("#other", alice, server)
    assert take(alice) == [":ircserv 442 alice #other :You're not on that channel"]
    assert channel.topic == ""


def test_invite(server):
    channel = joined(server, "alice")
    alice = server.find_client("alice")
    bob = server.find_client("bob")
    invite("bob #chan", alice, server)
    invite("bob #chan", alice, server)
    assert channel.invited == ["bob"]
    assert take(alice)[0] == ":ircserv 341 alice #chan bob"
    assert take(bob)[0] == ":alice!alice@127.0.0.1 INVITE bob #chan"


def test_invite_errors(server):
    channel = joined(server, "alice", "bob")
    alice = server.find_client("alice")
    bob = server.find_client("bob")
    invite("nobody #chan", alice, server)
    assert take(alice) == [":ircserv 401 alice nobody :No such nick/channel"]
    invite("bob #chan", alice, server)
    assert take(alice) == [":ircserv 443 alice bob #chan :is already on channel"]
    channel.modes += "i"
    invite("carol #chan", bob, server)
    assert take(bob) == [":ircserv 482 bob #chan :You're not channel operator"]
    assert channel.invited == []


def test_kick(server):
    channel = joined(server, "alice", "bob")
    alice = server.find_client("alice")
    bob = server.find_client("bob")
    kick("#chan bob :bye", alice, server)
    expected = [":alice!alice@127.0.0.1 KICK #chan bob bye"]
    assert take(alice) == expected
    assert take(bob) == expected
    assert not channel.is_in_channel(bob)


def test_kick_errors_and_creator(server):
    channel = joined(server, "alice", "bob")
    alice = server.find_client("alice")
    bob = server.find_client("bob")
    kick("#chan alice", bob, server)
    assert take(bob) == [":ircserv 482 bob #chan :You're not channel operator"]
    channel.add_operator("bob")
    kick("#chan alice", bob, server)
    assert take(bob) == []
    assert channel.is_in_channel(alice)
    kick("#chan carol", alice, server)
    assert take(alice) == [":ircserv 441 alice carol #chan :They aren't on that channel"]


def test_quit(server):
    channel = joined(server, "alice", "bob")
    alice = server.find_client("alice")
    bob = server.find_client("bob")
    join("#solo", alice, server)
    alice.sent.clear()
    quit_(":gone", alice, server)
    assert "#solo" not in server.channels
    assert not channel.is_in_channel(alice)
    assert take(bob) == [":alice!alice@127.0.0.1 QUIT gone"]
    assert take(alice) == []