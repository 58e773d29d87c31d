from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence


@dataclass(frozen=True)
class ValidatedFilename:
    name: str
    extension: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ScanDirectories:
    target: Path
    output: Path
    temp: Path

    def document_path(self, filename: ValidatedFilename) -> Path:
        return self.output / filename.name


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished external command."""

    args: Sequence[str]
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class AcquisitionResult:
    document: Optional[Path]
    created: bool
