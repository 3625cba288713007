import json

import pytest

from gmblacklist.i18n import EN_US, ZH_CN, Translator, format_message


def test_format_message_positional():
    assert format_message("Player %1$s is already banned", ["Steve"]) == "Player Steve is already banned"


def test_format_message_reordered_arguments():
    assert format_message("%2$s-%1$s", ["a", "b"]) == "b-a"


def test_format_message_missing_argument_left_unchanged():
    assert format_message("%1$s and %2$s", ["x"]) == "x and %2$s"


def test_translate_default_english():
    translator = Translator()
    assert translator.translate("disconnect.forever") == "Forever"


def test_translate_fills_placeholders():
    translator = Translator("en_US")
    result = translator.translate("command.unban.success", "Alex")
    assert result == format_message(EN_US["command.unban.success"], ["Alex"])
    assert "Alex" in result


def test_choose_chinese():
    translator = Translator()
    translator.choose_language("zh_CN")
    assert translator.translate("disconnect.forever") == ZH_CN["disconnect.forever"]


def test_choose_unknown_language_raises():
    translator = Translator()
    with pytest.raises(KeyError):
        translator.choose_language("xx_XX")


def test_unknown_key_returns_key():
    assert Translator().translate("no.such.key") == "no.such.key"


def test_update_or_create_writes_file(tmp_path):
    translator = Translator()
    translator.update_or_create_language(tmp_path, "en_US", EN_US)
    stored = json.loads((tmp_path / "en_US.json").read_text(encoding="utf-8"))
    assert stored == EN_US


def test_update_keeps_existing_values_and_adds_missing(tmp_path):
    (tmp_path / "en_US.json").write_text(
        json.dumps({"disconnect.forever": "Always"}), encoding="utf-8"
    )
    translator = Translator()
    merged = translator.update_or_create_language(tmp_path, "en_US", EN_US)
    assert merged["disconnect.forever"] == "Always"
    assert merged["command.ban.desc"] == EN_US["command.ban.desc"]
    assert set(merged) == set(EN_US)


def test_load_all_languages_reads_custom_file(tmp_path):
    (tmp_path / "de_DE.json").write_text(
        json.dumps({"disconnect.forever": "Dauerhaft"}), encoding="utf-8"
    )
    (tmp_path / "broken.json").write_text("{", encoding="utf-8")
    translator = Translator()
    assert translator.load_all_languages(tmp_path) == ["de_DE"]
    translator.choose_language("de_DE")
    assert translator.translate("disconnect.forever") == "Dauerhaft"
    assert translator.translate("command.ban.desc") == EN_US["command.ban.desc"]