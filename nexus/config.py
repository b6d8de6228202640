"""
nexus.config — YAML Configuration Loader
=========================================

Reads ``config.yaml`` for the **non-secret** application settings
(token lifetime, completion bonus, chat history cap, dev-only switches).
Secrets (``JWT_SECRET``, ``DATABASE_URL``) stay in the environment / ``.env``.

Usage::

    from nexus.config import load_config

    cfg = load_config()              # reads ./config.yaml by default
    print(cfg.app_name)              # "Nexus Workspace"
    print(cfg.completion_xp_bonus)   # 150

The path can be overridden with the ``NEXUS_CONFIG`` environment variable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = "config.yaml"


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class NexusConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    # Identity
    app_name: str

    # Auth
    token_ttl_days: int

    # Gamification
    completion_xp_bonus: int

    # Assistant
    chat_history_limit: int = 50

    # Development only: exposes POST /api/seed when true
    enable_seed_endpoint: bool = False


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path | None = None) -> NexusConfig:
    """Read *path* and return a :class:`NexusConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.  Defaults to
        ``$NEXUS_CONFIG`` or ``config.yaml`` in the current working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    KeyError
        If a required key is missing from the YAML file.
    """
    if path is None:
        path = os.getenv("NEXUS_CONFIG", DEFAULT_CONFIG_PATH)

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    return NexusConfig(
        app_name=raw["app_name"],
        token_ttl_days=int(raw["token_ttl_days"]),
        completion_xp_bonus=int(raw["completion_xp_bonus"]),
        chat_history_limit=int(raw.get("chat_history_limit", 50)),
        enable_seed_endpoint=bool(raw.get("enable_seed_endpoint", False)),
    )
