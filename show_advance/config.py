"""Configuration: defaults, optional config.json, then environment overrides."""
import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .types import PlaceholderPolicy, RenderMode, RenderOptions

ROOT = Path(__file__).resolve().parent.parent

DEFAULT_CONFIG = {
    "port": 4173,
    "static_root": "static",
    "output_dir": "output",
    "mode": "production",
    "placeholder_policy": "text",  # "text" or "blank"
    "placeholder_text": "TBD",
    "print_settle_delay": 0.15,  # seconds before the title is restored
}

ENV_OVERRIDES = {
    "PORT": "port",
    "SHOW_ADVANCE_STATIC_ROOT": "static_root",
    "SHOW_ADVANCE_OUTPUT_DIR": "output_dir",
    "SHOW_ADVANCE_MODE": "mode",
    "SHOW_ADVANCE_PLACEHOLDER": "placeholder_policy",
}


def _load_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(data, dict):
            return data
        print(f"[CONFIG] Ignoring {path}: expected a JSON object")
    except Exception as e:
        print(f"[CONFIG] Could not read {path}: {e}")
    return {}


def load_config(path: Optional[Path] = None, env_file: Optional[Path] = None) -> dict:
    """
    Merge the defaults with an optional JSON file and the environment.

    A .env file next to the project (or env_file) is loaded first; values
    already in the environment win.
    """
    load_dotenv(env_file or ROOT / ".env")

    cfg = DEFAULT_CONFIG.copy()
    if path is not None:
        for k, v in _load_file(Path(path)).items():
            if k in DEFAULT_CONFIG:
                cfg[k] = v

    for env_name, key in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is not None and value.strip():
            cfg[key] = value.strip()

    try:
        cfg["port"] = int(cfg["port"])
    except (TypeError, ValueError):
        print(f"[CONFIG] Invalid port {cfg['port']!r}, using {DEFAULT_CONFIG['port']}")
        cfg["port"] = DEFAULT_CONFIG["port"]

    try:
        cfg["print_settle_delay"] = float(cfg["print_settle_delay"])
    except (TypeError, ValueError):
        cfg["print_settle_delay"] = DEFAULT_CONFIG["print_settle_delay"]

    return cfg


def resolve_path(value, base: Path = ROOT) -> Path:
    p = Path(value)
    return p if p.is_absolute() else base / p


def render_options_from_config(cfg: dict) -> RenderOptions:
    return RenderOptions(
        mode=RenderMode.parse(cfg.get("mode")),
        placeholder_policy=PlaceholderPolicy.parse(cfg.get("placeholder_policy")),
        placeholder_text=str(cfg.get("placeholder_text") or DEFAULT_CONFIG["placeholder_text"]),
    )
