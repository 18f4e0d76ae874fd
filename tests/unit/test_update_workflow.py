from unittest.mock import patch

import pytest

import bbctl.api.updater as updater
from bbctl.api import update
from bbctl.exceptions import (
    BackupError,
    InstallError,
    PreflightError,
    ServiceRestartError,
    UnsupportedPlatformError,
    VerificationError,
)
from bbctl.local.ops import LinuxOps
from bbctl.types import Platform
from tests.factories import (
    FakeOps,
    FakeResponse,
    WORKING_BINARY,
    file_mode,
    zipped,
)

LINUX_AMD64 = Platform(os="linux", arch="amd64")
DARWIN_ARM64 = Platform(os="darwin", arch="arm64")
LINUX_AMD64_URL = (
    "https://nightly.link/beeper/bridge-manager/workflows/go.yaml/main/"
    "bbctl-linux-amd64.zip"
)

STAGES = [
    ("backup_current_binary", BackupError("failed to backup current bbctl binary")),
    ("download_and_install", InstallError("failed to download and install bbctl")),
    (
        "verify_installation",
        VerificationError("bbctl is not functioning correctly after update"),
    ),
    ("restart_service", ServiceRestartError("failed to restart service bbctl")),
]


@pytest.fixture
def recorded(monkeypatch, config):
    """
    Replace every filesystem and network stage with a recorder
    """
    calls = []

    def _backup(_config):
        calls.append("backup_current_binary")
        return _config.BACKUP_PATH

    def _install(url, _config):
        calls.append("download_and_install")
        return _config.INSTALL_PATH

    def _verify(_config):
        calls.append("verify_installation")
        return "bbctl version 0.13.0"

    def _restart(ops, name):
        calls.append("restart_service")
        ops.restart_service(name)

    monkeypatch.setattr(updater, "backup_current_binary", _backup)
    monkeypatch.setattr(updater, "download_and_install", _install)
    monkeypatch.setattr(updater, "verify_installation", _verify)
    monkeypatch.setattr(updater, "restart_service", _restart)
    return calls


def test_linux_update_order(recorded, config):
    ops = FakeOps(config, calls=recorded)

    result = update(config, ops=ops, platform=LINUX_AMD64)

    assert recorded == [
        "backup_current_binary",
        "download_and_install",
        "verify_installation",
        "restart_service",
        "restart_service:bbctl-test",
    ]
    assert result.download_url == LINUX_AMD64_URL
    assert result.platform == LINUX_AMD64
    assert result.backup_path == config.BACKUP_PATH
    assert result.install_path == config.INSTALL_PATH
    assert result.service_name == "bbctl-test"
    assert result.warnings == ()


def test_darwin_update_runs_preflight_first(recorded, config):
    ops = FakeOps(config, preflight_required=True, os_version="11.7.10", calls=recorded)

    result = update(config, ops=ops, platform=DARWIN_ARM64)

    assert recorded[:3] == [
        "install_prerequisites",
        "get_os_version",
        "backup_current_binary",
    ]
    assert result.download_url.endswith("bbctl-macos-arm64.zip")
    assert len(result.warnings) == 1
    assert "11.7.10 is older than Monterey" in result.warnings[0]


def test_preflight_failure_stops_update(recorded, config):
    class FailingOps(FakeOps):
        def get_os_version(self):
            raise PreflightError("failed to check macOS version: sw_vers not found")

    ops = FailingOps(config, preflight_required=True, calls=recorded)
    with pytest.raises(PreflightError, match="failed to check macOS version"):
        update(config, ops=ops, platform=DARWIN_ARM64)
    assert recorded == ["install_prerequisites"]


def test_unsupported_platform_stops_update(recorded, config):
    ops = FakeOps(config, preflight_required=True, calls=recorded)
    with pytest.raises(
        UnsupportedPlatformError, match="unsupported OS or architecture: linux/386"
    ):
        update(config, ops=ops, platform=Platform(os="linux", arch="386"))
    assert recorded == []


@pytest.mark.parametrize("index", range(len(STAGES)))
def test_failure_stops_later_stages(monkeypatch, recorded, config, index):
    name, error = STAGES[index]

    def _fail(*args, **kwargs):
        recorded.append(name)
        raise error

    monkeypatch.setattr(updater, name, _fail)
    ops = FakeOps(config, calls=recorded)

    with pytest.raises(type(error)) as exc_info:
        update(config, ops=ops, platform=LINUX_AMD64)

    assert exc_info.value is error
    assert recorded == [stage for stage, _ in STAGES[: index + 1]]


def test_ops_selected_from_platform(recorded, config):
    with patch.object(LinuxOps, "restart_service") as mock_restart:
        update(config, platform=LINUX_AMD64)
    mock_restart.assert_called_once_with("bbctl-test")


@patch("bbctl.api.updater.requests.get")
def test_update_end_to_end(mock_get, config, installed_binary):
    new_binary = WORKING_BINARY.replace("0.13.0", "0.14.0")
    mock_get.return_value = FakeResponse(zipped({"bbctl": new_binary}))
    config.INSTALL_PATH.parent.mkdir(parents=True)
    ops = FakeOps(config)

    result = update(config, ops=ops, platform=LINUX_AMD64)

    mock_get.assert_called_once_with(
        LINUX_AMD64_URL, stream=True, timeout=config.DOWNLOAD_TIMEOUT
    )
    assert not installed_binary.exists()
    assert config.BACKUP_PATH.read_text() == WORKING_BINARY
    assert config.INSTALL_PATH.read_text() == new_binary
    assert file_mode(config.INSTALL_PATH) == 0o755
    assert result.version_output == "bbctl version 0.14.0"
    assert ops.calls == ["restart_service:bbctl-test"]


@patch("bbctl.api.updater.requests.get")
def test_update_end_to_end_broken_build(mock_get, config, installed_binary):
    mock_get.return_value = FakeResponse(
        zipped({"bbctl": "#!/bin/sh\nexit 2\n"})
    )
    config.INSTALL_PATH.parent.mkdir(parents=True)
    ops = FakeOps(config)

    with pytest.raises(VerificationError, match="not functioning correctly"):
        update(config, ops=ops, platform=LINUX_AMD64)
    assert config.BACKUP_PATH.read_text() == WORKING_BINARY
    assert ops.calls == []
