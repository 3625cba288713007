"""Console front end for managing the ban lists."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .blacklist import Blacklist
from .commands import BanCommands, CommandOrigin, CommandResult, OriginType, Server
from .config import load_config
from .i18n import BUILTIN_LANGUAGES, Translator


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the console commands."""
    parser = argparse.ArgumentParser(prog="gmblacklist", description="Manage player and IP bans.")
    parser.add_argument("--data-dir", default=".", help="directory holding the ban files")
    parser.add_argument("--config-dir", default="config", help="directory holding config.json")
    parser.add_argument("--lang-dir", default=None, help="directory of language files")
    sub = parser.add_subparsers(dest="command", required=True)

    ban = sub.add_parser("ban", help="ban a player")
    ban.add_argument("name")
    ban.add_argument("-t", "--time", type=int, default=None, help="duration in minutes")
    ban.add_argument("-r", "--reason", default=None)

    unban = sub.add_parser("unban", help="unban a player")
    unban.add_argument("name")

    banip = sub.add_parser("banip", aliases=["ban-ip"], help="ban an IP address")
    banip.add_argument("ip")
    banip.add_argument("-t", "--time", type=int, default=None, help="duration in minutes")
    banip.add_argument("-r", "--reason", default=None)

    unbanip = sub.add_parser("unbanip", help="unban an IP address")
    unbanip.add_argument("ip")

    banlist = sub.add_parser("banlist", help="show the ban list")
    banlist.add_argument("mode", nargs="?", choices=["players", "ips"], default="players")

    check = sub.add_parser("check", help="vet a joining client")
    check.add_argument("uuid")
    check.add_argument("name")
    check.add_argument("ip")
    check.add_argument("--xuid", default="")
    return parser


def _make_translator(language: str, lang_dir: Path) -> Translator:
    translator = Translator(language)
    for code, table in BUILTIN_LANGUAGES.items():
        try:
            translator.update_or_create_language(lang_dir, code, table)
        except OSError:
            pass
    translator.load_all_languages(lang_dir)
    try:
        translator.choose_language(language)
    except KeyError:
        pass
    return translator


def _emit(result: CommandResult) -> int:
    stream = sys.stdout if result.success else sys.stderr
    for line in result.messages:
        print(line, file=stream)
    return 0 if result.success else 1


def main(argv=None) -> int:
    """Run one console command; return the process exit status."""
    args = build_parser().parse_args(argv)
    config_dir = Path(args.config_dir)
    config = load_config(config_dir / "config.json")
    problems = config.validate()
    lang_dir = Path(args.lang_dir) if args.lang_dir else config_dir / "lang"
    translator = _make_translator(config.language, lang_dir)
    for key in problems:
        print(translator.translate(key), file=sys.stderr)

    data_dir = Path(args.data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    blacklist = Blacklist(data_dir, translator)
    blacklist.load()
    blacklist.purge_expired()

    if args.command == "check":
        message = blacklist.check_login(args.xuid, args.uuid, args.name, args.ip)
        if message is None:
            return 0
        print(message)
        return 1

    commands = BanCommands(blacklist, translator, Server())
    origin = CommandOrigin(OriginType.DEDICATED_SERVER)
    if args.command == "ban":
        result = commands.ban(origin, args.name, args.time, args.reason)
    elif args.command == "unban":
        result = commands.unban(origin, args.name)
    elif args.command in ("banip", "ban-ip"):
        result = commands.ban_ip(origin, args.ip, args.time, args.reason)
    elif args.command == "unbanip":
        result = commands.unban_ip(origin, args.ip)
    else:
        result = commands.ban_list(origin, args.mode)
    return _emit(result)


if __name__ == "__main__":
    sys.exit(main())