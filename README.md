# gmblacklist

Keeps a game server's ban list: players banned by name (and by UUID once it is
known), and IP addresses, either forever or for a number of minutes. Bans are
stored as JSON in `banned-players.json` and `banned-ips.json`, expired bans can
be purged automatically, and every message a player or operator sees comes from
a translation table (English `en_US` and Simplified Chinese `zh_CN` are built in).

## Installing

```
pip install .
```

Python 3.10 or later is needed. The package has no third-party dependencies.
To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
gmblacklist --help
```

Global options (given before the subcommand):

| option         | default             | meaning                                 |
|----------------|---------------------|-----------------------------------------|
| `--data-dir`   | `.`                 | directory holding the two ban files     |
| `--config-dir` | `config`            | directory holding `config.json`         |
| `--lang-dir`   | `<config-dir>/lang` | directory of language files             |

Subcommands:

```
gmblacklist ban NAME [-t MINUTES] [-r REASON]
gmblacklist unban NAME
gmblacklist banip IP [-t MINUTES] [-r REASON]     # also: ban-ip
gmblacklist unbanip IP
gmblacklist banlist [players|ips]
gmblacklist check UUID NAME IP [--xuid XUID]
```

Without `-t` a ban lasts forever; a given duration must be at least one minute.
Without `-r` (or with an empty reason) the translated default reason is used.
Every run first purges expired bans. Messages go to standard output on success
and to standard error on failure; the exit status is 0 or 1 accordingly.

`check` vets a joining client: it prints the disconnect message and exits with 1
if the client would be refused (no XUID, a banned player, or a banned address),
and exits with 0 otherwise. Bans found to have run out are lifted.

Each run writes `en_US.json` and `zh_CN.json` into the language directory,
adding any missing keys to files already there, then loads every `*.json` file
it finds, so translations can be edited or new languages added.

### Configuration

`config.json` is created with defaults when it is missing or unreadable:

| key                      | default | meaning                                   |
|--------------------------|---------|-------------------------------------------|
| `version`                | `1`     | configuration format version              |
| `language`               | `en_US` | language of all messages                  |
| `CommandPermissionLevel` | `4`     | values outside 0–4 are reset to 4 with an error message; 0 draws a warning |

## Using it as a library

```python
from pathlib import Path

from gmblacklist.blacklist import Blacklist
from gmblacklist.commands import BanCommands, CommandOrigin, OriginType, Server
from gmblacklist.i18n import Translator

data = Path("data")
data.mkdir(exist_ok=True)

translator = Translator("en_US")
blacklist = Blacklist(data, translator)
blacklist.load()

blacklist.ban_player("Steve", "Console", 60, "griefing")   # one hour
blacklist.ban_player("Alex", "Console", -1, "cheating")    # forever
blacklist.is_name_banned("Steve")                          # True

for line in blacklist.describe_players():
    print(line)

blacklist.unban_player("Steve")

commands = BanCommands(blacklist, translator, Server(players=[]))
result = commands.ban_ip(CommandOrigin(OriginType.DEDICATED_SERVER), "203.0.113.7", 30)
print(result.success, result.messages)
```

Modules:

- `gmblacklist.config` – `Config` (with `validate()`), `load_config`, `save_config`.
- `gmblacklist.i18n` – `Translator` (`translate`, `choose_language`,
  `update_or_create_language`, `load_all_languages`) and `format_message`,
  which fills `%1$s`-style placeholders.
- `gmblacklist.blacklist` – `Blacklist`, plus the helpers `get_ip`,
  `parse_time`, `is_expired` and `expiry_time`. `OnlinePlayer` describes what a
  connected player must offer: `uuid`, `real_name`, `ip_and_port` and
  `disconnect(message)`.
- `gmblacklist.commands` – `BanCommands` with `ban`, `unban`, `ban_ip`,
  `unban_ip` and `ban_list`. Each checks the `CommandOrigin` (only a player or
  the dedicated server may issue commands), validates the duration, fills in the
  default reason and returns a `CommandResult` with `success` and `messages`.
  `ban` bans a player listed in `Server.players` by UUID and disconnects them,
  and any other name offline by name; `ban_ip` disconnects every listed player
  connected from the address.

`Blacklist.check_login` returns the disconnect message for a joining client, or
`None` to admit it. `Blacklist.start_expiry_task(interval, stop_event)` starts a
daemon thread that calls `purge_expired()` every `interval` seconds (60 by
default) until the event is set.

## Ban file format

Each entry is a JSON object with `reason`, `source`, `expires` and `created`,
plus `name` (and `uuid` once known) for players or `ip` for addresses. Times are
written as `YYYY-MM-DD HH:MM:SS +ZZZZ` in local time; a permanent ban has
`"expires": "forever"`. A source of `Console` is shown translated in listings.

## What it does not do

The package does not run or attach to a game server. It does not intercept
logins or register in-game commands: a host application has to call
`check_login` when a client joins and route commands to `BanCommands`, passing
its connected players in `Server`. `CommandPermissionLevel` is stored and
validated, but no permission check is made by the package itself. From the
command line there are no connected players, so `ban` always bans by name.