from dataclasses import dataclass, field

import pytest

from gmblacklist.blacklist import Blacklist, is_expired
from gmblacklist.commands import (
    BanCommands,
    CommandOrigin,
    CommandResult,
    OriginType,
    Server,
)
from gmblacklist.i18n import Translator


@dataclass
class FakePlayer:
    uuid: str
    real_name: str
    ip_and_port: str
    messages: list = field(default_factory=list)

    def disconnect(self, message):
        self.messages.append(message)


@pytest.fixture
def translator():
    return Translator("en_US")


@pytest.fixture
def blacklist(tmp_path, translator):
    bl = Blacklist(tmp_path, translator)
    bl.load()
    return bl


@pytest.fixture
def server():
    return Server()


@pytest.fixture
def commands(blacklist, translator, server):
    return BanCommands(blacklist, translator, server)


CONSOLE = CommandOrigin(OriginType.DEDICATED_SERVER)


def test_ban_offline_player_forever(commands, blacklist, translator):
    result = commands.ban(CONSOLE, "Steve")
    assert result == CommandResult(
        True, ["Player Steve is successfully banned, unban date: Forever"]
    )
    record = blacklist.players[0]
    assert record["name"] == "Steve"
    assert record["source"] == "Console"
    assert record["expires"] == "forever"
    assert record["reason"] == translator.translate("disconnect.defaultReason")


def test_ban_twice_reports_already_banned(commands, translator):
    commands.ban(CONSOLE, "Steve")
    result = commands.ban(CONSOLE, "Steve")
    assert not result.success
    assert result.messages == [translator.translate("command.ban.isBanned", "Steve")]


def test_ban_from_player_records_source(commands, blacklist):
    admin = FakePlayer("uuid-admin", "Admin", "10.0.0.1:19132")
    origin = CommandOrigin(OriginType.PLAYER, admin)
    assert commands.ban(origin, "Alex", reason="griefing").success
    record = blacklist.players[0]
    assert record["source"] == "Admin"
    assert record["reason"] == "griefing"


@pytest.mark.parametrize("minutes", [0, -5])
def test_ban_rejects_short_duration(commands, blacklist, translator, minutes):
    result = commands.ban(CONSOLE, "Steve", minutes)
    assert result == CommandResult(False, [translator.translate("command.error.invalidTime")])
    assert blacklist.players == []


def test_ban_with_duration_is_not_yet_expired(commands, blacklist):
    result = commands.ban(CONSOLE, "Steve", 30, "spam")
    assert result.success
    expires = blacklist.players[0]["expires"]
    assert expires != "forever"
    assert is_expired(expires) is False


def test_empty_reason_uses_default(commands, blacklist, translator):
    commands.ban(CONSOLE, "Steve", None, "")
    assert blacklist.players[0]["reason"] == translator.translate("disconnect.defaultReason")


def test_ban_online_player_disconnects(commands, blacklist, server, translator):
    player = FakePlayer("uuid-1", "Steve", "10.0.0.2:19132")
    server.players.append(player)
    assert commands.ban(CONSOLE, "Steve", reason="cheating").success
    assert blacklist.players[0]["uuid"] == "uuid-1"
    forever = translator.translate("disconnect.forever")
    assert player.messages == [translator.translate("disconnect.isBanned", "cheating", forever)]


@pytest.mark.parametrize("origin_type", [OriginType.COMMAND_BLOCK, OriginType.OTHER])
def test_invalid_origin_is_refused(commands, blacklist, translator, origin_type):
    origin = CommandOrigin(origin_type)
    expected = [translator.translate("command.error.invalidCommandOrigin")]
    assert commands.ban(origin, "Steve").messages == expected
    assert commands.unban(origin, "Steve").messages == expected
    assert commands.ban_ip(origin, "10.0.0.9").messages == expected
    assert commands.unban_ip(origin, "10.0.0.9").messages == expected
    assert commands.ban_list(origin).success is False
    assert blacklist.players == [] and blacklist.ips == []


def test_unban_round_trip(commands, blacklist, translator):
    commands.ban(CONSOLE, "Steve")
    result = commands.unban(CONSOLE, "Steve")
    assert result == CommandResult(True, [translator.translate("command.unban.success", "Steve")])
    assert blacklist.players == []
    again = commands.unban(CONSOLE, "Steve")
    assert again == CommandResult(False, [translator.translate("command.unban.notBanned", "Steve")])


def test_ban_ip_disconnects_matching_players(commands, blacklist, server, translator):
    inside = FakePlayer("u1", "A", "10.0.0.5:19132")
    outside = FakePlayer("u2", "B", "10.0.0.6:19132")
    server.players.extend([inside, outside])
    result = commands.ban_ip(CONSOLE, "10.0.0.5", reason="flood")
    forever = translator.translate("disconnect.forever")
    assert result.messages == [translator.translate("command.banip.success", "10.0.0.5", forever)]
    assert inside.messages == [translator.translate("disconnect.ipIsBanned", "flood", forever)]
    assert outside.messages == []
    assert blacklist.is_ip_banned("10.0.0.5")


def test_ban_ip_twice_and_unban(commands, translator):
    commands.ban_ip(CONSOLE, "10.0.0.7")
    second = commands.ban_ip(CONSOLE, "10.0.0.7")
    assert second.messages == [translator.translate("command.banip.isBanned", "10.0.0.7")]
    assert commands.unban_ip(CONSOLE, "10.0.0.7").success
    missing = commands.unban_ip(CONSOLE, "10.0.0.7")
    assert missing == CommandResult(
        False, [translator.translate("command.unbanip.notBanned", "10.0.0.7")]
    )


def test_ban_list_empty(commands, translator):
    expected = [translator.translate("command.banlist.noBans")]
    assert commands.ban_list(CONSOLE).messages == expected
    assert commands.ban_list(CONSOLE, "ips").messages == expected


def test_ban_list_modes(commands, blacklist):
    commands.ban(CONSOLE, "Steve")
    commands.ban_ip(CONSOLE, "10.0.0.8")
    assert commands.ban_list(CONSOLE).messages == blacklist.describe_players()
    assert commands.ban_list(CONSOLE, "players").messages == blacklist.describe_players()
    ips = commands.ban_list(CONSOLE, "ips").messages
    assert ips == blacklist.describe_ips()
    assert "10.0.0.8" in ips[0]