import logging
import platform as _platform
import sys
from typing import Dict, Optional, Tuple

from bbctl.exceptions import UnsupportedPlatformError
from bbctl.types import Platform

logger = logging.getLogger("bbctl")

NIGHTLY_URL = (
    "https://nightly.link/beeper/bridge-manager/workflows/go.yaml/main/"
    "bbctl-{artifact_os}-{arch}.zip"
)

DOWNLOAD_URLS: Dict[Tuple[str, str], str] = {
    ("darwin", "amd64"): NIGHTLY_URL.format(artifact_os="macos", arch="amd64"),
    ("darwin", "arm64"): NIGHTLY_URL.format(artifact_os="macos", arch="arm64"),
    ("linux", "amd64"): NIGHTLY_URL.format(artifact_os="linux", arch="amd64"),
    ("linux", "arm64"): NIGHTLY_URL.format(artifact_os="linux", arch="arm64"),
}

_MACHINE_ALIASES = {
    "x86_64": "amd64",
    "x64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv8l": "arm64",
}


def _os_name(sys_platform: str) -> str:
    if sys_platform.startswith("linux"):
        return "linux"
    if sys_platform.startswith("win"):
        return "windows"
    return sys_platform


def normalize_arch(machine: str) -> str:
    _machine = machine.strip().lower()
    return _MACHINE_ALIASES.get(_machine, _machine)


def detect_platform(
    sys_platform: Optional[str] = None, machine: Optional[str] = None
) -> Platform:
    """
    Return the platform of the running interpreter with the os and
    architecture named the way the release artifacts name them
    """
    os_name = _os_name(sys_platform if sys_platform is not None else sys.platform)
    arch = normalize_arch(machine if machine is not None else _platform.machine())
    logger.debug(f"Detected platform {os_name}/{arch}")
    return Platform(os=os_name, arch=arch)


def resolve_download_url(platform: Platform) -> str:
    try:
        return DOWNLOAD_URLS[platform.key]
    except KeyError:
        raise UnsupportedPlatformError(
            f"unsupported OS or architecture: {platform.os}/{platform.arch}"
        ) from None
