"""BepInEx release resolution and archive deployment."""

from .resolver import (
    Asset,
    Release,
    asset_filename,
    clean_version,
    find_release,
    format_release,
    release_from_payload,
    resolve_version,
    select_asset,
)
from .service import (
    DeployResult,
    RegistryClient,
    build_ssl_context,
    deploy,
    effective_source_root,
    install_archive,
    merge_install,
)

__all__ = [
    "Asset",
    "DeployResult",
    "RegistryClient",
    "Release",
    "asset_filename",
    "build_ssl_context",
    "clean_version",
    "deploy",
    "effective_source_root",
    "find_release",
    "format_release",
    "install_archive",
    "merge_install",
    "release_from_payload",
    "resolve_version",
    "select_asset",
]
