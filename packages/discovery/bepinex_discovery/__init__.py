"""Steam library discovery and Unity game classification."""

from .locator import discover_roots, parse_library_manifest
from .models import Application, RuntimeVariant
from .runtime import detect_runtime
from .scanner import find_data_folder, is_unity_game, scan

__all__ = [
    "Application",
    "RuntimeVariant",
    "detect_runtime",
    "discover_roots",
    "find_data_folder",
    "is_unity_game",
    "parse_library_manifest",
    "scan",
]
