"""Translated messages with positional ``%N$s`` placeholders."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from pathlib import Path

# Built-in message tables are kept as nested sections; placeholders are
# written ``{N}`` here and expanded to the ``%N$s`` form used at runtime.
_EN_US_SECTIONS: dict = {
    "disconnect": {
        "isBanned": "You are banned!\n\nReason: {1} \nEnd Time: {2}",
        "ipIsBanned": "Your IP is banned:\n\nReason: {1} \nEnd Time: {2}",
        "defaultReason": "You are banned by Admin",
        "forever": "Forever",
        "clientNotAuth": (
            "The client is not logged in! \n\n"
            "To access the server, log in to your Xbox account!"
        ),
    },
    "command": {
        "ban": {
            "desc": "Ban a player",
            "success": "Player {1} is successfully banned, unban date: {2}",
            "isBanned": "Player {1} is already banned",
        },
        "unban": {
            "desc": "unban a player",
            "success": "Player {1} is successfully unbanned!",
            "notBanned": "Player {1} is not banned!",
        },
        "banip": {
            "desc": "ban an IP",
            "success": "IP {1} is successfully banned, unban date: {2}",
            "isBanned": "IP {1} is already banned",
        },
        "unbanip": {
            "desc": "unban an IP",
            "success": "IP {1} is successfully unbanned!",
            "notBanned": "IP {1} is not banned!",
        },
        "error": {
            "invalidTime": "The ban duration must be 1 minute or greater!",
            "invalidCommandOrigin": (
                "This command can only be executed by the player or the console!"
            ),
        },
        "banlist": {
            "desc": "Query ban list",
            "players": {
                "showInfo": "Player {1} is banned by {2}, reason: {3} , End Time: {4}",
            },
            "ips": {
                "showInfo": "IP {1} is banned by {2}, reason: {3} ,End Time: {4}",
            },
            "noBans": "No banned information was queried",
        },
        "source": {"console": "Console"},
    },
    "permission": {
        "error": {
            "invalidLevel": "Invalid command permission level! Reset to default!",
        },
        "warning": {
            "dangerousLevel": (
                "[WARNING] Setting the command permission level to 0 is dangerous! "
                "This means that everyone can use this plugin command!"
            ),
        },
    },
    "error": {
        "fileIsBroken": "File {1} is broken, trying to generate a new one.",
    },
}

_ZH_CN_SECTIONS: dict = {
    "disconnect": {
        "isBanned": "你已被服务器封禁！\n\n原因： {1} \n解封时间： {2}",
        "ipIsBanned": "你的IP地址已被服务器封禁！\n\n原因： {1} \n解封时间： {2}",
        "defaultReason": "你已被管理员封禁",
        "forever": "永久封禁",
        "clientNotAuth": "客户端未登录！\n\n" "如需进入服务器，请登录Xbox账户！",
    },
    "command": {
        "ban": {
            "desc": "封禁一名玩家",
            "success": "已成功封禁玩家 {1} ， 解封日期： {2}",
            "isBanned": "玩家 {1} 已经被封禁",
        },
        "unban": {
            "desc": "解封一名玩家",
            "success": "已成功解除玩家 {1} 的封禁",
            "notBanned": "无法解除封禁，玩家 {1} 未被服务器封禁！",
        },
        "banip": {
            "desc": "封禁一个IP地址",
            "success": "已成功IP地址 {1} ，解封日期： {2}",
            "isBanned": "IP地址 {1} 已经被封禁",
        },
        "unbanip": {
            "desc": "解封一个IP地址",
            "success": "已成功IP地址 {1} 的封禁",
            "notBanned": "无法解除封禁，IP地址 {1} 未被服务器封禁！",
        },
        "error": {
            "invalidTime": "封禁时长必须大于等于1分钟！",
            "invalidCommandOrigin": "该命令只能由玩家或控制台执行！",
        },
        "banlist": {
            "desc": "查询封禁列表",
            "players": {
                "showInfo": "玩家 {1} 已被 {2} 封禁，封禁原因：{3} ，截止日期：{4}",
            },
            "ips": {
                "showInfo": "IP地址 {1} 已被 {2} 封禁，封禁原因：{3} ，截止日期：{4}",
            },
            "noBans": "没有查询到封禁信息",
        },
        "source": {"console": "控制台"},
    },
    "permission": {
        "error": {"invalidLevel": "无效的命令权限等级！已重置为默认值！"},
        "warning": {
            "dangerousLevel": (
                "[警告] 将命令权限等级设置为 0 是十分危险的！"
                "这意味着所有人都可以使用本插件命令！"
            ),
        },
    },
    "error": {"fileIsBroken": "文件 {1} 已损坏！正在重新生成文件！"},
}

_BRACE_PLACEHOLDER = re.compile(r"\{(\d+)\}")


def _flatten(sections: Mapping, prefix: str = "") -> dict[str, str]:
    """Turn nested sections into dotted keys with ``%N$s`` placeholders."""
    flat: dict[str, str] = {}
    for name, value in sections.items():
        key = f"{prefix}{name}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, key + "."))
        else:
            flat[key] = _BRACE_PLACEHOLDER.sub(r"%\1$s", value)
    return flat


EN_US: dict[str, str] = _flatten(_EN_US_SECTIONS)
ZH_CN: dict[str, str] = _flatten(_ZH_CN_SECTIONS)

BUILTIN_LANGUAGES: dict[str, dict[str, str]] = {"en_US": EN_US, "zh_CN": ZH_CN}

_PLACEHOLDER = re.compile(r"%(\d+)\$s")


def format_message(template: str, args: Sequence[str]) -> str:
    """Replace each ``%N$s`` with the N-th argument; unmatched placeholders stay."""

    def substitute(match: re.Match) -> str:
        index = int(match.group(1)) - 1
        if 0 <= index < len(args):
            return str(args[index])
        return match.group(0)

    return _PLACEHOLDER.sub(substitute, template)


def _read_language_file(path: Path) -> dict[str, str]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not hold a JSON object")
    return {str(key): str(value) for key, value in data.items()}


class Translator:
    """Looks up messages in the chosen language."""

    def __init__(self, language: str = "en_US") -> None:
        self.languages: dict[str, dict[str, str]] = {
            code: dict(table) for code, table in BUILTIN_LANGUAGES.items()
        }
        self.language = language

    def update_or_create_language(self, lang_dir, code: str, defaults: Mapping[str, str]) -> dict[str, str]:
        """Write ``code.json`` adding any keys from ``defaults`` the file lacks."""
        lang_dir = Path(lang_dir)
        path = lang_dir / f"{code}.json"
        try:
            existing = _read_language_file(path)
        except (OSError, ValueError):
            existing = {}
        merged = {**dict(defaults), **existing}
        lang_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(merged, indent=4, ensure_ascii=False), encoding="utf-8")
        self.languages[code] = merged
        return merged

    def load_all_languages(self, lang_dir) -> list[str]:
        """Load every readable ``*.json`` file in ``lang_dir``; return their codes."""
        loaded: list[str] = []
        for path in sorted(Path(lang_dir).glob("*.json")):
            try:
                table = _read_language_file(path)
            except (OSError, ValueError):
                continue
            self.languages[path.stem] = table
            loaded.append(path.stem)
        return loaded

    def choose_language(self, code: str) -> None:
        if code not in self.languages:
            raise KeyError(f"unknown language: {code}")
        self.language = code

    def translate(self, key: str, *args: str) -> str:
        """Return the message for ``key`` with its placeholders filled in."""
        table = self.languages.get(self.language, {})
        template = table.get(key)
        if template is None:
            template = self.languages.get("en_US", {}).get(key, key)
        return format_message(template, args)