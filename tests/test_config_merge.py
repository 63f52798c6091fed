import json

import pytest

from zeus_rules.config import DEFAULT_RULES, RulesConfig, _deep_merge, env_overrides, load_rules


def test_deep_merge_simple():
    a = {"rules": {"base_range": 3, "max_god_level": 3}, "api": {"port": 8000}}
    b = {"rules": {"max_god_level": 5}, "api": {"host": "0.0.0.0"}}
    c = _deep_merge(a, b)
    assert c["rules"]["base_range"] == 3 and c["rules"]["max_god_level"] == 5
    assert c["api"]["port"] == 8000 and c["api"]["host"] == "0.0.0.0"
    assert a["rules"]["max_god_level"] == 3


def test_env_overrides_parsing(monkeypatch):
    monkeypatch.setenv("ZEUS_RULES__RULES__MAX_GOD_LEVEL", "4")
    monkeypatch.setenv("ZEUS_RULES__RULES__STRICT", "true")
    d = env_overrides()
    assert d["rules"]["max_god_level"] == 4
    assert d["rules"]["strict"] is True


def test_defaults_match_dataclass():
    assert RulesConfig.from_dict(DEFAULT_RULES["rules"]) == RulesConfig()


def test_yaml_then_env(tmp_path, monkeypatch):
    path = tmp_path / "rules.yaml"
    path.write_text("rules:\n  base_range: 4\n  player_count: 3\n", encoding="utf-8")
    monkeypatch.setenv("ZEUS_RULES__RULES__PLAYER_COUNT", "4")
    rules = load_rules([str(path)])
    assert rules.base_range == 4
    assert rules.player_count == 4
    assert rules.dice_per_turn == 3


def test_json_file_without_env(tmp_path, monkeypatch):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"rules": {"item_capacity": 3}}), encoding="utf-8")
    monkeypatch.setenv("ZEUS_RULES__RULES__ITEM_CAPACITY", "9")
    assert load_rules([str(path)], use_env=False).item_capacity == 3


def test_unknown_keys_are_dropped(caplog):
    rules = RulesConfig.from_dict({"base_range": 2, "combat": 1})
    assert rules.base_range == 2
    assert "combat" in caplog.text


def test_non_mapping_file_rejected(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_rules([str(path)], use_env=False)
