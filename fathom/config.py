"""
Settings for fathom.

config.yaml is parsed on first use and cached for the life of the process;
missing sections fall back to DEFAULTS. runtime_config.yaml holds the knobs
that may change while the server runs (history recording on/off) and is
re-read whenever its mtime moves.

FATHOM_CONFIG / FATHOM_RUNTIME_CONFIG (environment or .env) override the
file locations.
"""

import logging
import os
import re
import yaml
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).parent.parent
_CONFIG_PATH = Path(os.environ.get("FATHOM_CONFIG", _ROOT / "config.yaml"))
_RUNTIME_CONFIG_PATH = Path(os.environ.get("FATHOM_RUNTIME_CONFIG", _ROOT / "runtime_config.yaml"))

_ENV_REF = re.compile(r"\$\{(\w+)\}")

_config: dict | None = None

# last parsed `runtime:` block and the mtime it was read at
_runtime_config: dict = {}
_runtime_mtime: float = 0.0

DEFAULTS = {
    "server": {"host": "0.0.0.0", "port": 3000},
    "storage": {"sqlite_path": "./data/maritime_history.db"},
    "history": {"enabled": True, "limit": 50},
    "logging": {"level": "INFO"},
}


def _expand_env(obj):
    """Substitute ${NAME} in every string of a parsed YAML tree. Unset names become ''."""
    if isinstance(obj, dict):
        return {k: _expand_env(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env(v) for v in obj]
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    return obj


def _merge_defaults(raw: dict) -> dict:
    """Overlay raw onto DEFAULTS, section by section."""
    merged = {k: dict(v) for k, v in DEFAULTS.items()}
    for key, value in raw.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def load_config(path: Path | None = None) -> dict:
    """Parse config.yaml (or path) once; later calls get the cached dict."""
    global _config
    if _config is not None:
        return _config

    config_path = Path(path) if path else _CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    _config = _merge_defaults(_expand_env(raw))
    return _config


def get_config() -> dict:
    return _config if _config is not None else load_config()


def get_runtime_config() -> dict:
    """
    The `runtime:` block of runtime_config.yaml.

    Re-parsed only when the file's mtime differs from the last read. A
    missing file gives {}; a file that fails to parse leaves the previous
    block in place.
    """
    global _runtime_config, _runtime_mtime

    if not _RUNTIME_CONFIG_PATH.exists():
        return {}

    try:
        mtime = _RUNTIME_CONFIG_PATH.stat().st_mtime
    except OSError:
        return _runtime_config

    if mtime == _runtime_mtime:
        return _runtime_config

    try:
        with open(_RUNTIME_CONFIG_PATH) as f:
            data = yaml.safe_load(f) or {}
        _runtime_config = data.get("runtime", {}) or {}
        _runtime_mtime = mtime
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not reload %s: %s", _RUNTIME_CONFIG_PATH, e)

    return _runtime_config


def update_runtime_config(key: str, value) -> bool:
    """Persist runtime.<key> = value. False (and a log line) if the file can't be written."""
    global _runtime_mtime
    try:
        data = {}
        if _RUNTIME_CONFIG_PATH.exists():
            with open(_RUNTIME_CONFIG_PATH) as f:
                data = yaml.safe_load(f) or {}

        if not isinstance(data.get("runtime"), dict):
            data["runtime"] = {}
        data["runtime"][key] = value

        with open(_RUNTIME_CONFIG_PATH, "w") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True)

        # mtime resolution can hide a same-second rewrite
        _runtime_mtime = 0.0
        return True
    except (OSError, yaml.YAMLError) as e:
        logger.error(
            "Could not set runtime.%s in %s: %s (dir writable=%s)",
            key, _RUNTIME_CONFIG_PATH, e,
            os.access(_RUNTIME_CONFIG_PATH.parent, os.W_OK),
        )
        return False


def history_enabled() -> bool:
    """Runtime override wins over config.yaml's history.enabled."""
    rt = get_runtime_config()
    if "history_enabled" in rt:
        return bool(rt["history_enabled"])
    return bool(get_config().get("history", {}).get("enabled", True))
