"""Discovered game and scripting backend types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class Application:
    name: str
    path: Path


class RuntimeVariant(Enum):
    MONO = "Mono"
    IL2CPP = "IL2CPP"

    @property
    def engine_tag(self) -> str:
        return f"Unity.{self.value}"
