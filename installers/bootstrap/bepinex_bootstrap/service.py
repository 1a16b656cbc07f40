"""Release registry client and archive deployment into game folders."""

from __future__ import annotations

import json
import os
import shutil
import ssl
import tempfile
import urllib.request
import zipfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

import certifi

from bepinex_core.logging_setup import get_logger
from bepinex_discovery.models import Application, RuntimeVariant

from .resolver import Asset, Release, asset_filename, release_from_payload, select_asset


CA_BUNDLE_ENV = "BEPINEX_INSTALLER_CA_BUNDLE"
USER_AGENT = "BepInExInstaller/0.1"

ProgressCallback = Callable[[str], None]


def build_ssl_context() -> ssl.SSLContext:
    """Create the process-wide TLS context; call once before any client exists."""
    ca_bundle = os.environ.get(CA_BUNDLE_ENV, "").strip()
    context = ssl.create_default_context(cafile=ca_bundle or certifi.where())
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    return context


class RegistryClient:
    def __init__(
        self,
        context: ssl.SSLContext,
        repo: str = "BepInEx/BepInEx",
        api_base: str = "https://api.github.com",
        per_page: int = 30,
        timeout_s: int = 30,
        download_timeout_s: int = 180,
    ) -> None:
        self.context = context
        self.repo = repo
        self.api_base = api_base.rstrip("/")
        self.per_page = per_page
        self.timeout_s = timeout_s
        self.download_timeout_s = download_timeout_s

    def _urlopen(self, url: str, timeout: int, accept: str = "*/*"):
        request = urllib.request.Request(
            url,
            headers={
                "User-Agent": USER_AGENT,
                "Accept": accept,
            },
        )
        return urllib.request.urlopen(request, timeout=timeout, context=self.context)

    def releases_url(self) -> str:
        return f"{self.api_base}/repos/{self.repo}/releases?per_page={self.per_page}"

    def list_releases(self) -> list[Release]:
        with self._urlopen(self.releases_url(), timeout=self.timeout_s, accept="application/vnd.github+json") as response:
            payload = json.loads(response.read().decode("utf-8"))

        if not isinstance(payload, list):
            raise ValueError(f"Unexpected releases payload from {self.repo}: expected a list")
        releases = [release_from_payload(item) for item in payload]
        get_logger().info(f"fetched {len(releases)} release(s) from {self.repo}", extra={"event": "releases_listed"})
        return releases

    def download_file(self, url: str, dest: Path) -> Path:
        with self._urlopen(url, timeout=self.download_timeout_s) as response:
            dest.write_bytes(response.read())
        return dest


@contextmanager
def scoped_temp_file(suffix: str = ".zip") -> Iterator[Path]:
    fd, name = tempfile.mkstemp(prefix="bepinex-", suffix=suffix)
    os.close(fd)
    path = Path(name)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)


def extract_archive(archive: Path, dest: Path) -> None:
    with zipfile.ZipFile(archive) as zf:
        zf.extractall(dest)


def effective_source_root(extract_dir: Path) -> Path:
    """Unwrap archives that nest all content inside one container folder."""
    entries = list(extract_dir.iterdir())
    if len(entries) == 1 and entries[0].is_dir():
        return entries[0]
    return extract_dir


def merge_install(source: Path, target: Path) -> None:
    shutil.copytree(source, target, dirs_exist_ok=True)


def install_archive(archive: Path, target: Path) -> None:
    with tempfile.TemporaryDirectory(prefix="bepinex-extract-") as tmp:
        extract_dir = Path(tmp)
        extract_archive(archive, extract_dir)
        merge_install(effective_source_root(extract_dir), target)


@dataclass(frozen=True)
class DeployResult:
    application: Application
    release: Release
    variant: RuntimeVariant
    asset: Asset


def deploy(
    client: RegistryClient,
    app: Application,
    release: Release,
    variant: RuntimeVariant,
    progress: ProgressCallback | None = None,
) -> DeployResult:
    progress = progress or (lambda _msg: None)
    logger = get_logger()

    asset = select_asset(release, asset_filename(release.tag_name, variant))
    logger.info(f"selected asset {asset.name} for {app.name}", extra={"event": "asset_selected"})

    with scoped_temp_file() as archive:
        progress(f"Downloading {asset.name}")
        client.download_file(asset.url, archive)

        progress(f"Installing into {app.path}")
        install_archive(archive, app.path)

    logger.info(f"installed {release.tag_name} into {app.path}", extra={"event": "deploy_complete"})
    progress("Install complete")
    return DeployResult(application=app, release=release, variant=variant, asset=asset)
