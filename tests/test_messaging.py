from dataclasses import dataclass, field

import pytest

from ircserv.channel import Channel
from ircserv.commands.messaging import notice, privmsg


@dataclass(eq=False)
class FakeClient:
    fd: int
    nickname: str = ""
    username: str = ""
    hostname: str = "localhost"
    status: bool = True
    password: bool = True
    outgoing: list = field(default_factory=list)

    def queue(self, text):
        self.outgoing.append(text)


class FakeServer:
    def __init__(self):
        self.clients = {}
        self.channels = {}

    def add(self, client):
        self.clients[client.fd] = client
        return client

    def display(self):
        pass


@pytest.fixture
def world():
    server = FakeServer()
    alice = server.add(FakeClient(4, "alice", "ali"))
    bob = server.add(FakeClient(5, "bob", "bobu"))
    carol = server.add(FakeClient(6, "carol", "caru"))
    channel = Channel("#chan", alice)
    channel.add_member(bob)
    channel.add_member(carol)
    channel.add_operator("bobu")
    server.channels["#chan"] = channel
    return server, alice, bob, carol


def test_privmsg_channel_reaches_others(world):
    server, alice, bob, carol = world
    privmsg("#chan :hi there", alice, server)
    expected = [":alice!ali@localhost PRIVMSG #chan hi there\r\n"]
    assert bob.outgoing == expected
    assert carol.outgoing == expected
    assert alice.outgoing == []


def test_privmsg_operators_only(world):
    server, alice, bob, carol = world
    privmsg("@#chan :ops", carol, server)
    assert bob.outgoing == [":carol!caru@localhost PRIVMSG #chan ops\r\n"]
    assert alice.outgoing == [":carol!caru@localhost PRIVMSG #chan ops\r\n"]
    assert carol.outgoing == []


def test_privmsg_to_nicknames(world):
    server, alice, bob, carol = world
    privmsg("bob,carol :yo", alice, server)
    assert bob.outgoing == [":alice!ali@localhost PRIVMSG bob yo\r\n"]
    assert carol.outgoing == [":alice!ali@localhost PRIVMSG carol yo\r\n"]


def test_privmsg_unknown_nick(world):
    server, alice, _, _ = world
    privmsg("nobody :hey", alice, server)
    assert alice.outgoing == [":ircserv 401 alice nobody :No such nick/channel\r\n"]


def test_privmsg_unknown_channel(world):
    server, alice, _, _ = world
    privmsg("@#none :hey", alice, server)
    assert alice.outgoing == [":ircserv 401 alice #none :No such nick/channel\r\n"]


def test_privmsg_no_recipient(world):
    server, alice, _, _ = world
    privmsg("", alice, server)
    assert alice.outgoing == [":ircserv 411 alice :No recipient given (PRIVMSG)\r\n"]


def test_privmsg_no_text(world):
    server, alice, bob, _ = world
    privmsg("bob hello", alice, server)
    assert alice.outgoing == [":ircserv 412 alice :No text to send\r\n"]
    assert bob.outgoing == []


def test_notice_channel(world):
    server, alice, bob, carol = world
    notice("#chan :note", alice, server)
    assert bob.outgoing == [":alice!ali@localhost NOTICE #chan note\r\n"]
    assert carol.outgoing == bob.outgoing
    assert alice.outgoing == []


def test_notice_to_nick(world):
    server, alice, bob, _ = world
    notice("bob :!help", alice, server)
    assert bob.outgoing == [":alice!ali@localhost NOTICE bob !help\r\n"]


def test_notice_never_reports_errors(world):
    server, alice, _, _ = world
    notice("", alice, server)
    notice("nobody :x", alice, server)
    notice("#none :x", alice, server)
    notice("bob no-colon", alice, server)
    assert all(not c.outgoing for c in server.clients.values())