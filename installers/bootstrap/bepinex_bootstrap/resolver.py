"""Release selection and asset name resolution for BepInEx downloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from bepinex_core.errors import NotFoundError
from bepinex_discovery.models import RuntimeVariant


@dataclass(frozen=True)
class Asset:
    name: str
    url: str


@dataclass(frozen=True)
class Release:
    tag_name: str
    name: str
    prerelease: bool
    assets: tuple[Asset, ...] = ()


def _asset_from_payload(item: Any) -> Asset:
    if not isinstance(item, dict) or not isinstance(item.get("name"), str) or not isinstance(item.get("browser_download_url"), str):
        raise ValueError(f"Malformed release asset: {item!r}")
    return Asset(name=item["name"], url=item["browser_download_url"])


def release_from_payload(item: dict[str, Any]) -> Release:
    if not isinstance(item, dict) or not isinstance(item.get("tag_name"), str) or not item["tag_name"]:
        raise ValueError(f"Malformed release record: {item!r}")
    tag = item["tag_name"]
    assets = item.get("assets") or []
    if not isinstance(assets, list):
        raise ValueError(f"Malformed asset list in release {tag}")
    return Release(
        tag_name=tag,
        name=item.get("name") or tag,
        prerelease=bool(item.get("prerelease")),
        assets=tuple(_asset_from_payload(a) for a in assets),
    )


def format_release(index: int, release: Release) -> str:
    suffix = " (prerelease)" if release.prerelease else ""
    return f"{index}. {release.tag_name}{suffix} - {release.name}"


def resolve_version(releases: Sequence[Release], user_input: str | None) -> str:
    """Turn the version prompt answer into a release tag.

    Blank input means the newest release. A number within ``1..len(releases)``
    picks from the displayed list. Anything else is taken as a literal tag and
    is only checked later by :func:`find_release`.
    """
    text = (user_input or "").strip()
    if not text:
        if not releases:
            raise NotFoundError("No releases available")
        return releases[0].tag_name
    if text.isascii() and text.isdigit():
        index = int(text)
        if 1 <= index <= len(releases):
            return releases[index - 1].tag_name
    return text


def find_release(releases: Sequence[Release], tag_name: str) -> Release:
    for release in releases:
        if release.tag_name == tag_name:
            return release
    raise NotFoundError(f"Could not find release {tag_name}")


def clean_version(tag_name: str) -> str:
    return tag_name[1:] if tag_name.startswith("v") else tag_name


def uses_unity_naming(version: str) -> bool:
    # 6.x and bleeding-edge builds ship one archive per Unity backend.
    return version.startswith("6.") or "-pre" in version or "-be" in version


def asset_filename(tag_name: str, variant: RuntimeVariant) -> str:
    version = clean_version(tag_name)
    if uses_unity_naming(version):
        return f"BepInEx-{variant.engine_tag}-win-x64-{version}.zip"
    return f"BepInEx_win_x64_{version}.zip"


def select_asset(release: Release, filename: str) -> Asset:
    for asset in release.assets:
        if asset.name == filename:
            return asset
    raise NotFoundError(f"Could not find asset '{filename}' in release {release.tag_name}")
