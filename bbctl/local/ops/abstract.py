from abc import ABC, abstractmethod

from bbctl.configuration import UpdaterConfiguration


class AbstractPlatformOps(ABC):
    # whether the update has to run install_prerequisites and an OS version
    # check before touching the installed binary
    preflight_required: bool = False

    def __init__(self, configuration: UpdaterConfiguration):
        self.configuration = configuration

    @abstractmethod
    def install_prerequisites(self):
        """
        Install the developer tooling the new binary depends on
        """
        raise NotImplementedError

    @abstractmethod
    def get_os_version(self) -> str:
        """
        Return the version string of the running operating system
        """
        raise NotImplementedError

    @abstractmethod
    def restart_service(self, name: str):
        """
        Restart the background service with the given name
        """
        raise NotImplementedError
