import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


logger = logging.getLogger("bbctl")

__VERSION__ = "0.12.0"
__COMMIT__ = "unknown"
__BUILD_TIME__ = ""
USER_HOME = os.path.expanduser("~")


@dataclass(frozen=True)
class BuildInfo:
    tag: str
    commit: str = "unknown"
    build_time: str = ""

    @property
    def version(self) -> str:
        if not self.commit or self.commit == "unknown":
            return self.tag
        return f"{self.tag}+dev.{self.commit[:8]}"

    @classmethod
    def current(cls) -> "BuildInfo":
        return cls(tag=__VERSION__, commit=__COMMIT__, build_time=__BUILD_TIME__)


class UpdaterConfiguration(object):
    def __init__(
        self,
        binary_name: str = "",
        install_path: Optional[Union[str, Path]] = None,
        backup_path: Optional[Union[str, Path]] = None,
        service_name: str = "",
        min_macos_version: str = "",
        download_timeout: Optional[int] = None,
        command_timeout: Optional[int] = None,
    ):
        self.BINARY_NAME = binary_name or "bbctl"
        if binary_name:
            logger.debug(f"Using binary name (other than default): {binary_name}")
        self.INSTALL_PATH = (
            Path(install_path)
            if install_path
            else Path("/usr/local/bin").joinpath(self.BINARY_NAME)
        )
        if install_path:
            logger.debug(f"Using install path (other than default): {install_path}")
        self.BACKUP_PATH = (
            Path(backup_path)
            if backup_path
            else Path(USER_HOME).joinpath(f"{self.BINARY_NAME}.bak")
        )
        if backup_path:
            logger.debug(f"Using backup path (other than default): {backup_path}")
        self.SERVICE_NAME = service_name or "bbctl"
        if service_name:
            logger.debug(f"Using service (other than default): {service_name}")
        self.MIN_MACOS_VERSION = min_macos_version or "12.0.0"
        self.DOWNLOAD_TIMEOUT = (
            download_timeout if download_timeout is not None else 60
        )  # in seconds
        self.COMMAND_TIMEOUT = (
            command_timeout if command_timeout is not None else 30
        )  # in seconds

    def to_dict(self):
        return {k: v for k, v in self.__dict__.items() if k.isupper()}

    def __str__(self):
        return str(self.to_dict())
