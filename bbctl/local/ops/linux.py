import platform
import subprocess

from bbctl.exceptions import ServiceRestartError
from bbctl.local.ops.abstract import AbstractPlatformOps
from bbctl.local.utils import command_error_text, run_command


class LinuxOps(AbstractPlatformOps):
    preflight_required = False

    def install_prerequisites(self):
        # the linux builds are static, there is nothing to install
        pass

    def get_os_version(self) -> str:
        return platform.release()

    def restart_service(self, name: str):
        try:
            run_command(
                ["systemctl", "--user", "restart", name],
                timeout=self.configuration.COMMAND_TIMEOUT,
            )
        except (subprocess.SubprocessError, OSError) as e:
            raise ServiceRestartError(
                f"failed to restart service {name}: {command_error_text(e)}"
            ) from e
