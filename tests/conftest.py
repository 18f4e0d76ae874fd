import pytest

from bbctl.configuration import UpdaterConfiguration
from tests.factories import FakeOps, WORKING_BINARY, write_script


@pytest.fixture
def config(tmp_path):
    return UpdaterConfiguration(
        install_path=tmp_path / "install" / "bbctl",
        backup_path=tmp_path / "home" / "bbctl.bak",
        service_name="bbctl-test",
        command_timeout=10,
    )


@pytest.fixture
def installed_binary(tmp_path, monkeypatch):
    """
    A working bbctl executable that is the only one found in PATH
    """
    bin_dir = tmp_path / "bin"
    binary = write_script(bin_dir / "bbctl", WORKING_BINARY)
    monkeypatch.setenv("PATH", str(bin_dir))
    return binary


@pytest.fixture
def fake_ops(config):
    return FakeOps(config)
