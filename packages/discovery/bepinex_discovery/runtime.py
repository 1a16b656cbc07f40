"""Scripting backend detection for installed Unity games."""

from __future__ import annotations

from .models import Application, RuntimeVariant
from .scanner import find_data_folder


IL2CPP_MARKER_DIR = "il2cpp_data"


def detect_runtime(app: Application) -> RuntimeVariant:
    data_folder = find_data_folder(app.path)
    if data_folder is None:
        return RuntimeVariant.MONO
    if (data_folder / IL2CPP_MARKER_DIR).is_dir():
        return RuntimeVariant.IL2CPP
    return RuntimeVariant.MONO
