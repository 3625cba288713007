"""The ban, unban, banip, unbanip and banlist commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .blacklist import CONSOLE, Blacklist, OnlinePlayer, expiry_time
from .i18n import Translator


class OriginType(Enum):
    """Where a command was issued from."""

    PLAYER = "player"
    DEDICATED_SERVER = "dedicated_server"
    COMMAND_BLOCK = "command_block"
    OTHER = "other"


_ALLOWED_ORIGINS = frozenset({OriginType.PLAYER, OriginType.DEDICATED_SERVER})


@dataclass
class CommandOrigin:
    """The issuer of a command; ``player`` is set when a player issued it."""

    type: OriginType = OriginType.DEDICATED_SERVER
    player: OnlinePlayer | None = None


@dataclass
class CommandResult:
    """Outcome of a command and the lines it reports."""

    success: bool
    messages: list[str] = field(default_factory=list)


@dataclass
class Server:
    """The players currently connected."""

    players: list = field(default_factory=list)


class _Rejected(Exception):
    """A command was refused with the given message."""


class BanCommands:
    """Runs ban commands against a blacklist."""

    def __init__(
        self,
        blacklist: Blacklist,
        translator: Translator | None = None,
        server: Server | None = None,
    ) -> None:
        self.blacklist = blacklist
        self.translator = translator if translator is not None else blacklist.translator
        self.server = server if server is not None else Server()

    def _tr(self, key: str, *args: str) -> str:
        return self.translator.translate(key, *args)

    def _error(self, key: str, *args: str) -> CommandResult:
        return CommandResult(False, [self._tr(key, *args)])

    def _ok(self, key: str, *args: str) -> CommandResult:
        return CommandResult(True, [self._tr(key, *args)])

    def _check_origin(self, origin: CommandOrigin) -> None:
        if origin.type not in _ALLOWED_ORIGINS:
            raise _Rejected(self._tr("command.error.invalidCommandOrigin"))

    def _ban_options(
        self, origin: CommandOrigin, minutes: int | None, reason: str | None
    ) -> tuple[str, int, str]:
        self._check_origin(origin)
        source = CONSOLE
        if origin.type is OriginType.PLAYER and origin.player is not None:
            source = origin.player.real_name
        if minutes is None:
            minutes = -1
        elif minutes < 1:
            raise _Rejected(self._tr("command.error.invalidTime"))
        if not reason:
            reason = self._tr("disconnect.defaultReason")
        return source, minutes, reason

    def _end_time(self, minutes: int) -> str:
        return self._tr("disconnect.forever") if minutes < 0 else expiry_time(minutes)

    def _online_player(self, name: str) -> OnlinePlayer | None:
        return next((p for p in self.server.players if p.real_name == name), None)

    def ban(
        self,
        origin: CommandOrigin,
        name: str,
        minutes: int | None = None,
        reason: str | None = None,
    ) -> CommandResult:
        """Ban a player, online by uuid or offline by name."""
        try:
            source, minutes, reason = self._ban_options(origin, minutes, reason)
        except _Rejected as rejected:
            return CommandResult(False, [str(rejected)])
        player = self._online_player(name)
        if player is not None:
            banned = self.blacklist.ban_online_player(player, source, minutes, reason)
        else:
            banned = self.blacklist.ban_player(name, source, minutes, reason)
        if banned:
            return self._ok("command.ban.success", name, self._end_time(minutes))
        return self._error("command.ban.isBanned", name)

    def unban(self, origin: CommandOrigin, name: str) -> CommandResult:
        """Lift the ban on a player name."""
        try:
            self._check_origin(origin)
        except _Rejected as rejected:
            return CommandResult(False, [str(rejected)])
        if self.blacklist.unban_player(name):
            return self._ok("command.unban.success", name)
        return self._error("command.unban.notBanned", name)

    def ban_ip(
        self,
        origin: CommandOrigin,
        ip: str,
        minutes: int | None = None,
        reason: str | None = None,
    ) -> CommandResult:
        """Ban an address and disconnect players connected from it."""
        try:
            source, minutes, reason = self._ban_options(origin, minutes, reason)
        except _Rejected as rejected:
            return CommandResult(False, [str(rejected)])
        if self.blacklist.ban_ip(ip, source, minutes, reason, list(self.server.players)):
            return self._ok("command.banip.success", ip, self._end_time(minutes))
        return self._error("command.banip.isBanned", ip)

    def unban_ip(self, origin: CommandOrigin, ip: str) -> CommandResult:
        """Lift the ban on an address."""
        try:
            self._check_origin(origin)
        except _Rejected as rejected:
            return CommandResult(False, [str(rejected)])
        if self.blacklist.unban_ip(ip):
            return self._ok("command.unbanip.success", ip)
        return self._error("command.unbanip.notBanned", ip)

    def ban_list(self, origin: CommandOrigin, mode: str | None = None) -> CommandResult:
        """List banned addresses when ``mode`` is ``ips``, else banned players."""
        try:
            self._check_origin(origin)
        except _Rejected as rejected:
            return CommandResult(False, [str(rejected)])
        if mode == "ips":
            return CommandResult(True, self.blacklist.describe_ips())
        return CommandResult(True, self.blacklist.describe_players())