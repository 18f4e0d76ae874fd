import logging
import os
import subprocess

from bbctl.exceptions import PreflightError, ServiceRestartError
from bbctl.local.ops.abstract import AbstractPlatformOps
from bbctl.local.utils import command_error_text, run_command

logger = logging.getLogger("bbctl")


class DarwinOps(AbstractPlatformOps):
    preflight_required = True

    def install_prerequisites(self):
        try:
            run_command(
                ["xcode-select", "--install"],
                timeout=self.configuration.COMMAND_TIMEOUT,
            )
        except subprocess.CalledProcessError as e:
            if "already installed" in (e.output or ""):
                logger.debug("Xcode Command Line Tools are already installed")
                return
            raise PreflightError(
                f"failed to install Xcode Command Line Tools: {command_error_text(e)}"
            ) from e
        except (subprocess.SubprocessError, OSError) as e:
            raise PreflightError(
                f"failed to install Xcode Command Line Tools: {e}"
            ) from e

    def get_os_version(self) -> str:
        try:
            result = run_command(
                ["sw_vers", "-productVersion"],
                timeout=self.configuration.COMMAND_TIMEOUT,
            )
        except (subprocess.SubprocessError, OSError) as e:
            raise PreflightError(
                f"failed to check macOS version: {command_error_text(e)}"
            ) from e
        return result.stdout.strip()

    def restart_service(self, name: str):
        target = f"gui/{os.getuid()}/{name}"
        try:
            run_command(
                ["launchctl", "kickstart", "-k", target],
                timeout=self.configuration.COMMAND_TIMEOUT,
            )
        except (subprocess.SubprocessError, OSError) as e:
            raise ServiceRestartError(
                f"failed to restart service {name}: {command_error_text(e)}"
            ) from e
