from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

OUTPUT_FORMATS = ("text", "json")
SETTINGS_VERSION = 1


class ConfigError(RuntimeError):
    pass


@dataclass
class Settings:
    version: int = 1
    output: str = "text"
    configs: Dict[str, str] = field(default_factory=dict)
    source_path: Optional[Path] = None

    def lookup(self, name: str) -> str:
        try:
            return self.configs[name]
        except KeyError:
            raise ConfigError(f"Unknown configuration name: {name}") from None


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        # Expand ${VAR} style
        return os.path.expandvars(value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def find_config_path() -> Optional[Path]:
    # Highest priority: explicit override
    override = os.environ.get("PACTL_CONFIG")
    if override:
        p = Path(override).expanduser()
        if p.is_file():
            return p
        raise ConfigError(f"PACTL_CONFIG path not found: {p}")

    # XDG base dirs
    xdg_home = Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()
    candidates = [xdg_home / "pactl" / "config.yaml"]

    xdg_dirs = os.environ.get("XDG_CONFIG_DIRS", "/etc/xdg")
    for d in xdg_dirs.split(":"):
        if d:
            candidates.append(Path(d) / "pactl" / "config.yaml")

    for c in candidates:
        if c.is_file():
            return c
    return None


def load_config(path: Optional[Path] = None) -> Settings:
    """Load CLI settings; the file is optional and defaults apply without one."""
    cfg_path = path or find_config_path()
    if cfg_path is None:
        return Settings()

    try:
        data = yaml.safe_load(cfg_path.read_text()) or {}
    except FileNotFoundError as e:
        raise ConfigError(str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {cfg_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file must contain a mapping: {cfg_path}")

    data = _expand_env(data)
    output = str(data.get("output") or "text").strip().lower()
    if output not in OUTPUT_FORMATS:
        raise ConfigError(f"Unsupported output format '{output}' in {cfg_path}")

    try:
        version = int(data.get("version", 1))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid settings version in {cfg_path}: {e}") from e
    if version != SETTINGS_VERSION:
        raise ConfigError(f"Unsupported settings version {version} in {cfg_path}")

    configs_raw = data.get("configs") or {}
    if not isinstance(configs_raw, dict):
        raise ConfigError(f"'configs' must be a mapping in {cfg_path}")
    configs = {str(name): str(value).strip() for name, value in configs_raw.items()}

    return Settings(
        version=version,
        output=output,
        configs=configs,
        source_path=cfg_path,
    )
