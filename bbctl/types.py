from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple


__all__ = [
    "Platform",
    "UpdateResult",
]


@dataclass(frozen=True)
class Platform:
    # Go-style names, e.g. linux/darwin and amd64/arm64
    os: str
    arch: str

    @property
    def key(self) -> Tuple[str, str]:
        return (self.os, self.arch)

    def __str__(self):
        return f"{self.os}/{self.arch}"


@dataclass(frozen=True)
class UpdateResult:
    platform: Platform
    download_url: str
    backup_path: Path
    install_path: Path
    service_name: str
    version_output: str = ""
    warnings: Tuple[str, ...] = field(default_factory=tuple)
