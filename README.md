# ircserv

A small IRC server for plain-text clients, with channels, topics, invitations,
kicks and the channel modes `i`, `t`, `k`, `l` and `o`.

## Installing

```
pip install .
```

No third-party libraries are needed.

## Running the server

```
ircserv <port> <password>
```

The password must not be empty and must not contain spaces. Clients register
with `PASS`, `NICK` and `USER`; once all three are accepted the server sends
the welcome reply and the message of the day. The server prints a status table
of channels and connected clients on its standard output whenever they change,
and stops cleanly on `SIGINT` (and `SIGQUIT` where the platform has it).

The message of the day is read from `./config/motd.config`, relative to the
directory the server is started from. If the file cannot be read, clients
receive the "MOTD File is missing" reply instead.

### Supported commands

| Command   | Purpose                                               |
|-----------|-------------------------------------------------------|
| `PASS`    | give the connection password                          |
| `NICK`    | set or change the nickname                            |
| `USER`    | set the username                                      |
| `PING`    | answered with `PONG` when addressed to `ircserv`      |
| `JOIN`    | join one or more channels, with optional keys         |
| `PART`    | leave channels, with an optional reason               |
| `QUIT`    | leave the server                                      |
| `TOPIC`   | show or change a channel topic                        |
| `MOTD`    | show the message of the day                           |
| `TIME`    | show the server's local time                          |
| `MODE`    | show or change channel modes                          |
| `INVITE`  | invite a user to a channel                            |
| `KICK`    | remove a user from a channel                          |
| `PRIVMSG` | message users, channels, or a channel's operators     |
| `NOTICE`  | like `PRIVMSG`, but never answered with an error      |

Any other command is answered with an "Unknown command" reply, which this
server sends with the numeric code 461.

Nicknames and usernames are cut to 13 characters; if one is already taken, a
number starting at 2 is appended until it is free.

### Channel modes

- `+i` / `-i`: invite-only channel
- `+t` / `-t`: only operators may change the topic (set on new channels)
- `+k <key>` / `-k`: channel key, letters and digits only
- `+l <limit>` / `-l`: member limit, digits only
- `+o <nick>` / `-o <nick>`: give or take operator status

The member who created a channel is its first operator: it cannot be demoted
with `-o` nor removed with `KICK`.

## Example session

```
ircserv 6667 password
```

Then, from any IRC client or a line-based TCP tool that ends lines with CRLF:

```
PASS password
NICK alice
USER alice 0 * :Alice
JOIN #general
TOPIC #general :hello everyone
MODE #general +l 10
```

## Using it as a library

`ircserv.server.Server(port, password)` holds the clients and channels;
`launch()` binds the listening socket, `loop()` serves until `stop()` is
called, and `close()` releases every connection. `status_report()` returns the
status table as text. Command handlers live in the `ircserv.commands`
sub-package and numeric replies in `ircserv.replies`.

## What it does not do

The package is a server only. It has no client, no bot, no server-to-server
linking, no user modes and no persistent storage: channels and registrations
last only as long as the process.