"""Player and IP ban lists persisted as JSON files."""

from __future__ import annotations

import json
import threading
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta
from pathlib import Path
from typing import Protocol

from .i18n import Translator

PLAYERS_FILE = "banned-players.json"
IPS_FILE = "banned-ips.json"
FOREVER = "forever"
CONSOLE = "Console"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class OnlinePlayer(Protocol):
    """A connected player that can be banned and disconnected."""

    uuid: str
    real_name: str
    ip_and_port: str

    def disconnect(self, message: str) -> None: ...


def get_ip(ip_and_port: str) -> str:
    """Strip the port from an ``address:port`` string."""
    return ip_and_port.split(":", 1)[0]


def parse_time(text: str) -> datetime:
    """Parse the local date and time at the start of a stored timestamp."""
    return datetime.strptime(text[:19], TIME_FORMAT)


def is_expired(expires: str, now: datetime | None = None) -> bool:
    """Tell whether a stored expiry time has passed; ``forever`` never does."""
    if expires == FOREVER:
        return False
    try:
        target = parse_time(expires)
    except ValueError:
        return True
    if now is None:
        now = datetime.now()
    elif now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    return not target > now


def expiry_time(minutes: int = 0, now: datetime | None = None) -> str:
    """Format the time ``minutes`` from ``now`` with its UTC offset."""
    if now is None:
        now = datetime.now().astimezone()
    elif now.tzinfo is None:
        now = now.astimezone()
    return (now + timedelta(minutes=minutes)).strftime(TIME_FORMAT + " %z")


def _read_list(path: Path) -> list[dict]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} does not hold a JSON array")
    return data


def _write_list(path: Path, records: list[dict]) -> None:
    path.write_text(json.dumps(records, separators=(",", ":"), ensure_ascii=False), encoding="utf-8")


class Blacklist:
    """Banned players and IP addresses, kept in two JSON files in ``directory``."""

    def __init__(self, directory=".", translator: Translator | None = None) -> None:
        self.directory = Path(directory)
        self.translator = translator if translator is not None else Translator()
        self._players: list[dict] = []
        self._ips: list[dict] = []
        self._lock = threading.RLock()

    @property
    def players_path(self) -> Path:
        return self.directory / PLAYERS_FILE

    @property
    def ips_path(self) -> Path:
        return self.directory / IPS_FILE

    @property
    def players(self) -> list[dict]:
        with self._lock:
            return [dict(record) for record in self._players]

    @property
    def ips(self) -> list[dict]:
        with self._lock:
            return [dict(record) for record in self._ips]

    def _tr(self, key: str, *args: str) -> str:
        return self.translator.translate(key, *args)

    def _end_time_label(self, expires: str) -> str:
        return self._tr("disconnect.forever") if expires == FOREVER else expires

    @staticmethod
    def _try(action: Callable[[], None]) -> None:
        try:
            action()
        except OSError:
            pass

    def load(self) -> None:
        """Read both files; a missing or broken file is written out afresh."""
        with self._lock:
            try:
                self._players = _read_list(self.players_path)
            except (OSError, ValueError):
                self._try(self.save_players)
            try:
                self._ips = _read_list(self.ips_path)
            except (OSError, ValueError):
                self._try(self.save_ips)

    def save_players(self) -> None:
        with self._lock:
            _write_list(self.players_path, self._players)

    def save_ips(self) -> None:
        with self._lock:
            _write_list(self.ips_path, self._ips)

    def is_banned(self, uuid: str, real_name: str) -> bool:
        """Check a joining player; a name-only ban learns the player's uuid."""
        with self._lock:
            for record in self._players:
                if "uuid" in record:
                    if record["uuid"] == uuid:
                        return True
                elif record.get("name") == real_name:
                    record["uuid"] = uuid
                    self.save_players()
                    return True
            return False

    def is_name_banned(self, real_name: str) -> bool:
        with self._lock:
            return any("name" in r and r["name"] == real_name for r in self._players)

    def is_uuid_banned(self, uuid: str) -> bool:
        with self._lock:
            return any("uuid" in r and r["uuid"] == uuid for r in self._players)

    def is_ip_banned(self, ip: str) -> bool:
        with self._lock:
            return any(r.get("ip") == ip for r in self._ips)

    def banned_info(self, uuid: str) -> tuple[str, str] | None:
        """Return ``(reason, expires)`` of the ban on ``uuid``, if any."""
        with self._lock:
            for record in self._players:
                if "uuid" in record and record["uuid"] == uuid:
                    return record["reason"], record["expires"]
            return None

    def banned_ip_info(self, ip: str) -> tuple[str, str] | None:
        """Return ``(reason, expires)`` of the ban on ``ip``, if any."""
        with self._lock:
            for record in self._ips:
                if record.get("ip") == ip:
                    return record["reason"], record["expires"]
            return None

    @staticmethod
    def _expires_for(minutes: int) -> str:
        return FOREVER if minutes < 0 else expiry_time(minutes)

    def ban_player(self, name: str, source: str, minutes: int, reason: str) -> bool:
        """Ban a player by name; negative ``minutes`` bans forever."""
        with self._lock:
            if self.is_name_banned(name):
                return False
            self._players.append(
                {
                    "name": name,
                    "reason": reason,
                    "source": source,
                    "expires": self._expires_for(minutes),
                    "created": expiry_time(),
                }
            )
            self.save_players()
            return True

    def ban_online_player(self, player: OnlinePlayer, source: str, minutes: int, reason: str) -> bool:
        """Ban a connected player by uuid and disconnect them."""
        with self._lock:
            if self.is_uuid_banned(player.uuid):
                return False
            expires = self._expires_for(minutes)
            self._players.append(
                {
                    "uuid": player.uuid,
                    "name": player.real_name,
                    "source": source,
                    "reason": reason,
                    "expires": expires,
                    "created": expiry_time(),
                }
            )
            self.save_players()
        player.disconnect(self._tr("disconnect.isBanned", reason, self._end_time_label(expires)))
        return True

    def ban_ip(
        self,
        ip: str,
        source: str,
        minutes: int,
        reason: str,
        players: Iterable[OnlinePlayer] = (),
    ) -> bool:
        """Ban an address and disconnect every listed player connected from it."""
        with self._lock:
            if self.is_ip_banned(ip):
                return False
            expires = self._expires_for(minutes)
            self._ips.append(
                {
                    "ip": ip,
                    "reason": reason,
                    "source": source,
                    "expires": expires,
                    "created": expiry_time(),
                }
            )
            self.save_ips()
        message = self._tr("disconnect.ipIsBanned", reason, self._end_time_label(expires))
        for player in players:
            if get_ip(player.ip_and_port) == ip:
                player.disconnect(message)
        return True

    def unban_player(self, name: str) -> bool:
        with self._lock:
            for index, record in enumerate(self._players):
                if record.get("name") == name:
                    del self._players[index]
                    self.save_players()
                    return True
            return False

    def unban_ip(self, ip: str) -> bool:
        with self._lock:
            for index, record in enumerate(self._ips):
                if record.get("ip") == ip:
                    del self._ips[index]
                    self.save_ips()
                    return True
            return False

    def purge_expired(self, now: datetime | None = None) -> None:
        """Drop every ban whose expiry time has passed and save both files."""
        with self._lock:
            self._players = [r for r in self._players if not is_expired(r["expires"], now)]
            self.save_players()
            self._ips = [r for r in self._ips if not is_expired(r["expires"], now)]
            self.save_ips()

    def start_expiry_task(
        self, interval: float = 60.0, stop_event: threading.Event | None = None
    ) -> threading.Thread:
        """Purge expired bans every ``interval`` seconds until ``stop_event`` is set."""
        stop = stop_event if stop_event is not None else threading.Event()

        def run() -> None:
            while not stop.wait(interval):
                self.purge_expired()

        thread = threading.Thread(target=run, name="ban-expiry", daemon=True)
        thread.start()
        return thread

    def _describe(self, records: list[dict], subject_key: str, message_key: str) -> list[str]:
        if not records:
            return [self._tr("command.banlist.noBans")]
        lines = []
        for record in records:
            source = record["source"]
            if source == CONSOLE:
                source = self._tr("command.source.console")
            lines.append(
                self._tr(
                    message_key,
                    record[subject_key],
                    source,
                    record["reason"],
                    self._end_time_label(record["expires"]),
                )
            )
        return lines

    def describe_players(self) -> list[str]:
        """One line per banned player, or a single "no bans" line."""
        with self._lock:
            return self._describe(self._players, "name", "command.banlist.players.showInfo")

    def describe_ips(self) -> list[str]:
        """One line per banned address, or a single "no bans" line."""
        with self._lock:
            return self._describe(self._ips, "ip", "command.banlist.ips.showInfo")

    def check_login(self, xuid: str, uuid: str, real_name: str, ip: str) -> str | None:
        """Vet a joining client; return the disconnect message, or None to admit it.

        Expired bans found along the way are lifted.
        """
        messages: list[str] = []
        if not xuid:
            messages.append(self._tr("disconnect.clientNotAuth"))
        if self.is_banned(uuid, real_name):
            reason, expires = self.banned_info(uuid) or ("", "")
            if is_expired(expires):
                self.unban_player(real_name)
            else:
                messages.append(self._tr("disconnect.isBanned", reason, self._end_time_label(expires)))
        if self.is_ip_banned(ip):
            reason, expires = self.banned_ip_info(ip) or ("", "")
            if is_expired(expires):
                self.unban_ip(ip)
            else:
                messages.append(self._tr("disconnect.ipIsBanned", reason, self._end_time_label(expires)))
        return messages[0] if messages else None