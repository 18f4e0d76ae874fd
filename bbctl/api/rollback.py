import logging
import shutil
from pathlib import Path
from typing import Optional

from bbctl.configuration import UpdaterConfiguration
from bbctl.exceptions import RestoreError
from bbctl.local.utils import make_executable

logger = logging.getLogger(__name__)


def restore(config: Optional[UpdaterConfiguration] = None) -> Path:
    """
    Put the binary saved by the last update back to the install path.

    :param config: UpdaterConfiguration
    :return: The path of the restored binary.
    """
    config = config or UpdaterConfiguration()
    if not config.BACKUP_PATH.is_file():
        raise RestoreError(f"no backup found at {config.BACKUP_PATH}")
    try:
        config.INSTALL_PATH.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(config.BACKUP_PATH), str(config.INSTALL_PATH))
        make_executable(config.INSTALL_PATH)
    except OSError as e:
        raise RestoreError(
            f"failed to restore {config.BINARY_NAME} from {config.BACKUP_PATH}: {e}"
        ) from e
    logger.debug(f"Restored {config.BACKUP_PATH} to {config.INSTALL_PATH}")
    return config.INSTALL_PATH
