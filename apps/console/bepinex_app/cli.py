"""Console entrypoint: pick a Unity game and install a BepInEx release into it."""

from __future__ import annotations

import argparse
import zipfile
from pathlib import Path
from typing import Mapping, Sequence

from bepinex_bootstrap import (
    DeployResult,
    RegistryClient,
    Release,
    build_ssl_context,
    deploy,
    find_release,
    format_release,
    resolve_version,
)
from bepinex_core import (
    AppConfig,
    NotFoundError,
    default_library_root,
    library_manifest_path,
    load_config,
    normalize_repo,
)
from bepinex_core.logging_setup import configure_logging, get_logger
from bepinex_discovery import Application, detect_runtime, discover_roots, scan

from .prompts import Prompter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bepinex-installer", description="Install BepInEx into a Steam Unity game")
    parser.add_argument("--game", default=None, help="Game folder name; skips the game prompt")
    parser.add_argument("--tag", default=None, help="Release tag or list number; skips the version prompt")
    parser.add_argument("--repo", default=None, help="GitHub owner/repo to fetch releases from")
    parser.add_argument("--config", default=None, help="Path to an alternative config.json")
    parser.add_argument("--verbose", action="store_true", help="Mirror log records to the console")
    return parser


def select_application(apps: Mapping[str, Application], prompter: Prompter, game: str | None = None) -> Application:
    if game is not None:
        if game not in apps:
            raise NotFoundError(f"Could not find game {game}")
        return apps[game]

    names = sorted(apps, key=str.lower)
    index = prompter.choose("Detected Unity games:", names)
    return apps[names[index]]


def select_release(releases: Sequence[Release], prompter: Prompter, tag: str | None = None) -> Release:
    if tag is None:
        prompter.show("Available BepInEx releases:")
        for index, release in enumerate(releases, start=1):
            prompter.show(format_release(index, release))
        tag = prompter.ask("Version to install (number or tag, blank for latest): ")
    return find_release(releases, resolve_version(releases, tag))


def run_install(
    cfg: AppConfig,
    client: RegistryClient,
    prompter: Prompter,
    game: str | None = None,
    tag: str | None = None,
) -> DeployResult:
    logger = get_logger()

    roots = discover_roots(default_library_root(cfg), library_manifest_path(cfg), cfg.steam.library_subpath)
    apps = scan(sorted(roots))
    app = select_application(apps, prompter, game)

    variant = detect_runtime(app)
    prompter.show(f"{app.name}: {variant.value} runtime")
    logger.info(f"{app.name} uses {variant.value}", extra={"event": "runtime_detected"})

    releases = client.list_releases()
    release = select_release(releases, prompter, tag)

    return deploy(client, app, release, variant, progress=prompter.show)


def build_client(cfg: AppConfig) -> RegistryClient:
    return RegistryClient(
        build_ssl_context(),
        repo=cfg.registry.repo,
        api_base=cfg.registry.api_base,
        per_page=cfg.registry.per_page,
        timeout_s=cfg.registry.timeout_s,
        download_timeout_s=cfg.registry.download_timeout_s,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    repo = None
    if args.repo is not None:
        repo = normalize_repo(args.repo)
        if repo is None:
            parser.error(f"--repo must look like owner/repo, got {args.repo!r}")

    try:
        cfg = load_config(Path(args.config).expanduser() if args.config else None)
        logger = configure_logging(keep_files=cfg.logging.keep_log_files, console=args.verbose)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}")
        return 1

    if repo is not None:
        cfg.registry.repo = repo

    try:
        # TLS settings are fixed here, before any registry request.
        client = build_client(cfg)
        result = run_install(cfg, client, Prompter(), game=args.game, tag=args.tag)
    except (KeyboardInterrupt, EOFError):
        print("Cancelled")
        return 1
    except NotFoundError as exc:
        logger.error(str(exc), extra={"event": "not_found"})
        print(f"Error: {exc}")
        return 1
    except (OSError, ValueError, zipfile.BadZipFile) as exc:
        logger.exception("install failed", extra={"event": "install_failed"})
        print(f"Error: {exc}")
        return 1

    print(f"Installed BepInEx {result.release.tag_name} ({result.variant.value}) into {result.application.path}")
    return 0
