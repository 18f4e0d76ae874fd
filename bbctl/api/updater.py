import logging
import os
import shutil
import subprocess
import zipfile
import zlib
from pathlib import Path
from typing import List, Optional

import requests

from bbctl.api.utils import stopwatch
from bbctl.configuration import UpdaterConfiguration
from bbctl.exceptions import (
    BackupError,
    InstallError,
    PreflightError,
    VerificationError,
)
from bbctl.local.ops import AbstractPlatformOps, get_platform_ops
from bbctl.local.platform import detect_platform, resolve_download_url
from bbctl.local.utils import (
    command_error_text,
    compare_versions,
    make_executable,
    run_command,
)
from bbctl.types import Platform, UpdateResult

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def check_os_version(version: str, minimum: str) -> Optional[str]:
    """
    Return a warning if the macOS version is older than the minimum, None
    otherwise. Raises PreflightError for output that is not a version.
    """
    try:
        below_minimum = compare_versions(version, minimum) < 0
    except ValueError as e:
        raise PreflightError(f"failed to check macOS version: {e}") from e
    if below_minimum:
        return (
            f"macOS version {version.strip()} is older than Monterey ({minimum})."
            " Please consider upgrading."
        )
    return None


def run_preflight(
    ops: AbstractPlatformOps, config: UpdaterConfiguration
) -> List[str]:
    if not ops.preflight_required:
        return []
    warnings = []
    ops.install_prerequisites()
    warning = check_os_version(ops.get_os_version(), config.MIN_MACOS_VERSION)
    if warning:
        logger.warning(warning)
        warnings.append(warning)
    return warnings


def backup_current_binary(config: UpdaterConfiguration) -> Path:
    current_path = shutil.which(config.BINARY_NAME)
    if not current_path:
        raise BackupError(
            f"failed to locate current {config.BINARY_NAME} binary: "
            f"'{config.BINARY_NAME}' not found in PATH"
        )
    if config.BACKUP_PATH.is_dir():
        raise BackupError(
            f"failed to backup current {config.BINARY_NAME} binary: "
            f"backup path {config.BACKUP_PATH} is a directory"
        )
    try:
        config.BACKUP_PATH.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(current_path, str(config.BACKUP_PATH))
    except OSError as e:
        raise BackupError(
            f"failed to backup current {config.BINARY_NAME} binary: {e}"
        ) from e
    logger.debug(f"Moved {current_path} to {config.BACKUP_PATH}")
    return config.BACKUP_PATH


def _download(url: str, destination: Path, timeout: int) -> None:
    logger.debug(f"Downloading {url} to {destination}")
    with requests.get(url, stream=True, timeout=timeout) as response:
        response.raise_for_status()
        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                f.write(chunk)


def _unpack(download: Path, install_path: Path, binary_name: str) -> None:
    if not zipfile.is_zipfile(download):
        os.replace(download, install_path)
        return
    with zipfile.ZipFile(download) as archive:
        members = [m for m in archive.infolist() if not m.is_dir()]
        candidates = [m for m in members if Path(m.filename).name == binary_name]
        if not candidates and len(members) == 1:
            candidates = members
        if not candidates:
            raise InstallError(
                f"failed to download and install {binary_name}: "
                f"archive does not contain '{binary_name}'"
            )
        logger.debug(f"Extracting {candidates[0].filename} to {install_path}")
        try:
            with archive.open(candidates[0]) as src, open(install_path, "wb") as dst:
                shutil.copyfileobj(src, dst)
        except (NotImplementedError, RuntimeError, zlib.error) as e:
            # unsupported compression, encrypted member or corrupt stream
            raise InstallError(
                f"failed to download and install {binary_name}: "
                f"cannot extract {candidates[0].filename}: {e}"
            ) from e


def download_and_install(url: str, config: UpdaterConfiguration) -> Path:
    install_path = config.INSTALL_PATH
    download = install_path.with_name(f".{install_path.name}.download")
    try:
        _download(url, download, config.DOWNLOAD_TIMEOUT)
        _unpack(download, install_path, config.BINARY_NAME)
    except (requests.RequestException, zipfile.BadZipFile, OSError) as e:
        raise InstallError(
            f"failed to download and install {config.BINARY_NAME}: {e}"
        ) from e
    finally:
        download.unlink(missing_ok=True)

    try:
        make_executable(install_path)
    except OSError as e:
        raise InstallError(
            f"failed to set permissions for {config.BINARY_NAME}: {e}"
        ) from e
    return install_path


def _version_check(config: UpdaterConfiguration) -> str:
    result = run_command(
        [str(config.INSTALL_PATH), "--version"], timeout=config.COMMAND_TIMEOUT
    )
    return result.stdout.strip()


def verify_installation(config: UpdaterConfiguration) -> str:
    try:
        return _version_check(config)
    except (subprocess.SubprocessError, OSError) as e:
        logger.debug(f"Version check failed, resetting permissions: {e}")

    try:
        make_executable(config.INSTALL_PATH)
    except OSError as e:
        raise VerificationError(
            f"failed to set permissions for {config.BINARY_NAME}: {e}"
        ) from e

    try:
        return _version_check(config)
    except (subprocess.SubprocessError, OSError) as e:
        raise VerificationError(
            f"{config.BINARY_NAME} is not functioning correctly after update: "
            f"{command_error_text(e)}"
        ) from e


def restart_service(ops: AbstractPlatformOps, service_name: str) -> None:
    ops.restart_service(service_name)
    logger.debug(f"Restarted service {service_name}")


@stopwatch
def update(
    config: Optional[UpdaterConfiguration] = None,
    ops: Optional[AbstractPlatformOps] = None,
    platform: Optional[Platform] = None,
) -> UpdateResult:
    config = config or UpdaterConfiguration()
    platform = platform or detect_platform()

    download_url = resolve_download_url(platform)
    if ops is None:
        ops = get_platform_ops(platform.os, config)
    warnings = run_preflight(ops, config)
    backup_path = backup_current_binary(config)
    install_path = download_and_install(download_url, config)
    version_output = verify_installation(config)
    restart_service(ops, config.SERVICE_NAME)

    return UpdateResult(
        platform=platform,
        download_url=download_url,
        backup_path=backup_path,
        install_path=install_path,
        service_name=config.SERVICE_NAME,
        version_output=version_output,
        warnings=tuple(warnings),
    )
