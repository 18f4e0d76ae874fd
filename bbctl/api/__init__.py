from .updater import update  # noqa
from .rollback import restore  # noqa
