"""Classify Steam library folders as Unity games."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from bepinex_core.errors import NotFoundError
from bepinex_core.logging_setup import get_logger

from .models import Application


DATA_FOLDER_SUFFIX = "_Data"
DATA_MARKER_FILE = "globalgamemanagers"
PLAYER_LIBRARY = "UnityPlayer.dll"


def _data_folders(app_dir: Path) -> list[Path]:
    return [p for p in sorted(app_dir.iterdir()) if p.is_dir() and p.name.endswith(DATA_FOLDER_SUFFIX)]


def find_data_folder(app_dir: Path) -> Path | None:
    """Return the ``<Name>_Data`` folder, preferring one that holds globalgamemanagers."""
    if not app_dir.is_dir():
        return None
    folders = _data_folders(app_dir)
    for folder in folders:
        if (folder / DATA_MARKER_FILE).is_file():
            return folder
    return folders[0] if folders else None


def is_unity_game(app_dir: Path) -> bool:
    if (app_dir / PLAYER_LIBRARY).is_file():
        return True
    return any((folder / DATA_MARKER_FILE).is_file() for folder in _data_folders(app_dir))


def scan(roots: Iterable[Path]) -> dict[str, Application]:
    logger = get_logger()
    apps: dict[str, Application] = {}

    for root in roots:
        for candidate in sorted(root.iterdir()):
            if not candidate.is_dir() or not is_unity_game(candidate):
                continue
            # Same folder name in a later library replaces the earlier one.
            apps[candidate.name] = Application(name=candidate.name, path=candidate)

    if not apps:
        raise NotFoundError("Could not find any Unity games")

    logger.info(f"found {len(apps)} Unity game(s)", extra={"event": "games_scanned"})
    return apps
