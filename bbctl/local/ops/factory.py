from enum import Enum

from bbctl.configuration import UpdaterConfiguration
from bbctl.exceptions import UnsupportedPlatformError
from bbctl.local.ops.abstract import AbstractPlatformOps
from bbctl.local.ops.darwin import DarwinOps
from bbctl.local.ops.linux import LinuxOps


class PlatformOpsType(Enum):
    DARWIN = "darwin"
    LINUX = "linux"


class PlatformOpsFactory:
    def __init__(self):
        self._builders = {}

    def register_builder(self, ops_type: PlatformOpsType, builder):
        self._builders[ops_type.value] = builder

    def get(
        self, os_name: str, configuration: UpdaterConfiguration
    ) -> AbstractPlatformOps:
        builder = self._builders.get(os_name)
        if not builder:
            raise UnsupportedPlatformError(f"unsupported OS: {os_name}")
        return builder(configuration)


platform_ops_factory = PlatformOpsFactory()
platform_ops_factory.register_builder(PlatformOpsType.DARWIN, DarwinOps)
platform_ops_factory.register_builder(PlatformOpsType.LINUX, LinuxOps)


def get_platform_ops(
    os_name: str, configuration: UpdaterConfiguration
) -> AbstractPlatformOps:
    return platform_ops_factory.get(os_name, configuration)
