"""Installer settings schema and loading helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 1
DEFAULT_REPO = "BepInEx/BepInEx"


@dataclass
class SteamConfig:
    root: str | None = None
    library_subpath: str = "steamapps/common"
    manifest: str | None = None


@dataclass
class RegistryConfig:
    repo: str = DEFAULT_REPO
    api_base: str = "https://api.github.com"
    per_page: int = 30
    timeout_s: int = 30
    download_timeout_s: int = 180


@dataclass
class LoggingConfig:
    keep_log_files: int = 7


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    steam: SteamConfig = field(default_factory=SteamConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_path() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "BepInExInstaller" / "config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "BepInExInstaller" / "config.json"
    return Path.home() / ".config" / "bepinex-installer" / "config.json"


def default_steam_root() -> Path:
    system = platform.system()
    if system == "Windows":
        return Path("C:/Program Files (x86)/Steam")
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Steam"
    return Path.home() / ".steam" / "steam"


def steam_root(cfg: AppConfig) -> Path:
    if cfg.steam.root:
        return Path(cfg.steam.root).expanduser()
    return default_steam_root()


def default_library_root(cfg: AppConfig) -> Path:
    return steam_root(cfg) / cfg.steam.library_subpath


def library_manifest_path(cfg: AppConfig) -> Path:
    if cfg.steam.manifest:
        return Path(cfg.steam.manifest).expanduser()
    return steam_root(cfg) / "steamapps" / "libraryfolders.vdf"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_steam(cfg: AppConfig) -> None:
    if not str(cfg.steam.library_subpath or "").strip():
        cfg.steam.library_subpath = SteamConfig.library_subpath


def normalize_repo(value: str | None) -> str | None:
    """Return ``owner/repo`` trimmed of slashes, or None when it is not one."""
    repo = str(value or "").strip().strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(part and not any(ch.isspace() for ch in part) for part in parts):
        return None
    return repo


def _normalize_registry(cfg: AppConfig) -> None:
    cfg.registry.repo = normalize_repo(cfg.registry.repo) or DEFAULT_REPO
    cfg.registry.api_base = str(cfg.registry.api_base or RegistryConfig.api_base).rstrip("/")
    cfg.registry.per_page = max(1, min(100, int(cfg.registry.per_page)))
    cfg.registry.timeout_s = max(1, int(cfg.registry.timeout_s))
    cfg.registry.download_timeout_s = max(1, int(cfg.registry.download_timeout_s))


def _normalize_logging(cfg: AppConfig) -> None:
    cfg.logging.keep_log_files = max(2, int(cfg.logging.keep_log_files))


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(data, dict):
        return AppConfig()

    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        steam=_merge(SteamConfig, data.get("steam", {}) or {}),
        registry=_merge(RegistryConfig, data.get("registry", {}) or {}),
        logging=_merge(LoggingConfig, data.get("logging", {}) or {}),
    )

    _normalize_steam(cfg)
    _normalize_registry(cfg)
    _normalize_logging(cfg)
    return cfg
