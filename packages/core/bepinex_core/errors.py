"""Error taxonomy shared by discovery, release resolution and deployment."""

from __future__ import annotations


class InstallerError(RuntimeError):
    pass


class NotFoundError(InstallerError):
    """Raised when a library root, game, release or asset cannot be located."""
