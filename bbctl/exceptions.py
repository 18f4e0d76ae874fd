class UpdateError(RuntimeError):
    pass


class UnsupportedPlatformError(UpdateError):
    pass


class PreflightError(UpdateError):
    pass


class BackupError(UpdateError):
    pass


class InstallError(UpdateError):
    pass


class VerificationError(UpdateError):
    pass


class ServiceRestartError(UpdateError):
    pass


class RestoreError(RuntimeError):
    pass
