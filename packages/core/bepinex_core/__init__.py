"""Core services for settings, logging and the installer error taxonomy."""

from .config import (
    AppConfig,
    default_library_root,
    library_manifest_path,
    load_config,
    normalize_repo,
    steam_root,
)
from .errors import InstallerError, NotFoundError

__all__ = [
    "AppConfig",
    "InstallerError",
    "NotFoundError",
    "default_library_root",
    "library_manifest_path",
    "load_config",
    "normalize_repo",
    "steam_root",
]
