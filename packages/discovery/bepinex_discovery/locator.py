"""Steam library root discovery from the default install and libraryfolders.vdf."""

from __future__ import annotations

from pathlib import Path

from bepinex_core.errors import NotFoundError
from bepinex_core.logging_setup import get_logger


_PATH_KEY = "path"


def _parse_entry(line: str) -> tuple[str, str] | None:
    # Entry lines look like: "path"    "D:\\SteamLibrary"
    parts = line.strip().split('"')
    if len(parts) != 5 or parts[0] or parts[4] or not parts[2] or parts[2].strip():
        return None
    return parts[1], parts[3]


def parse_library_manifest(text: str) -> list[str]:
    """Return every declared library path in a Steam ``libraryfolders.vdf``.

    The manifest is read line by line. A line counts as an entry when it holds
    exactly two quoted tokens separated by whitespace; only entries keyed
    ``path`` are returned, with doubled backslashes collapsed. Block names,
    braces and other keys are skipped.
    """
    values: list[str] = []
    for line in text.splitlines():
        entry = _parse_entry(line)
        if entry is None:
            continue
        key, value = entry
        if key == _PATH_KEY and value:
            values.append(value.replace("\\\\", "\\"))
    return values


def discover_roots(default_root: Path, manifest_path: Path | None, library_subpath: str = "steamapps/common") -> set[Path]:
    logger = get_logger()
    roots: set[Path] = set()

    if default_root.is_dir():
        roots.add(default_root)

    if manifest_path is not None and manifest_path.is_file():
        text = manifest_path.read_text(encoding="utf-8", errors="ignore")
        for declared in parse_library_manifest(text):
            candidate = Path(declared) / library_subpath
            if candidate.is_dir():
                roots.add(candidate)
    else:
        logger.info(f"library manifest not found at {manifest_path}", extra={"event": "manifest_missing"})

    if not roots:
        raise NotFoundError("Could not find any Steam library folders")

    logger.info(f"found {len(roots)} library root(s)", extra={"event": "roots_discovered"})
    return roots
