"""
tests/test_config.py — YAML configuration loader
=================================================
"""

from __future__ import annotations

import dataclasses

import pytest

from nexus.config import NexusConfig, load_config


def _write(tmp_path, text: str):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_loads_all_keys(tmp_path):
    path = _write(tmp_path, (
        "app_name: Nexus Workspace\n"
        "token_ttl_days: 7\n"
        "completion_xp_bonus: 150\n"
        "chat_history_limit: 20\n"
        "enable_seed_endpoint: true\n"
    ))
    cfg = load_config(path)
    assert cfg == NexusConfig(
        app_name="Nexus Workspace",
        token_ttl_days=7,
        completion_xp_bonus=150,
        chat_history_limit=20,
        enable_seed_endpoint=True,
    )


def test_optional_keys_default(tmp_path):
    path = _write(tmp_path, "app_name: X\ntoken_ttl_days: 1\ncompletion_xp_bonus: 10\n")
    cfg = load_config(path)
    assert cfg.chat_history_limit == 50
    assert cfg.enable_seed_endpoint is False


def test_missing_required_key(tmp_path):
    path = _write(tmp_path, "app_name: X\ntoken_ttl_days: 1\n")
    with pytest.raises(KeyError):
        load_config(path)


def test_missing_file_has_hint(tmp_path):
    with pytest.raises(FileNotFoundError, match="config.yaml.example"):
        load_config(tmp_path / "nope.yaml")


def test_env_override(tmp_path, monkeypatch):
    path = _write(tmp_path, "app_name: From Env\ntoken_ttl_days: 3\ncompletion_xp_bonus: 5\n")
    monkeypatch.setenv("NEXUS_CONFIG", str(path))
    assert load_config().app_name == "From Env"


def test_config_is_frozen(tmp_path):
    path = _write(tmp_path, "app_name: X\ntoken_ttl_days: 1\ncompletion_xp_bonus: 10\n")
    cfg = load_config(path)
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.app_name = "Y"
