from .abstract import AbstractPlatformOps  # noqa
from .darwin import DarwinOps  # noqa
from .linux import LinuxOps  # noqa
from .factory import get_platform_ops, platform_ops_factory  # noqa
