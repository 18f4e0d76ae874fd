import logging
import os
import re
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple, Union

logger = logging.getLogger("bbctl")

EXECUTABLE_MODE = 0o755

_VERSION_PATTERN = re.compile(r"^\d+(\.\d+)*$")


def run_command(
    cmd: List[str], timeout: Optional[float] = None
) -> subprocess.CompletedProcess:
    """
    Run a command to completion with stdout and stderr combined into one text
    stream. Raises CalledProcessError for non-zero exits (the combined output
    is available as its 'output' attribute), TimeoutExpired and OSError.
    """
    logger.debug(f"Running {' '.join(cmd)}")
    result = subprocess.run(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        timeout=timeout,
        check=True,
    )
    logger.debug(f"'{cmd[0]}' exited with {result.returncode}")
    return result


def command_error_text(e: Exception) -> str:
    output = getattr(e, "output", None)
    if isinstance(output, bytes):
        output = output.decode("utf-8", errors="replace")
    if output and output.strip():
        return f"{e} ({output.strip()})"
    return str(e)


def make_executable(path: Union[str, Path]) -> None:
    os.chmod(path, EXECUTABLE_MODE)


def parse_version(version: str) -> Tuple[int, ...]:
    _version = version.strip()
    if not _VERSION_PATTERN.match(_version):
        raise ValueError(f"malformed version string '{version.strip()}'")
    return tuple(int(part) for part in _version.split("."))


def compare_versions(a: str, b: str) -> int:
    """
    Compare two dotted versions component by component, padding the shorter
    one with zeros. Returns -1, 0 or 1.
    """
    _a, _b = parse_version(a), parse_version(b)
    length = max(len(_a), len(_b))
    _a = _a + (0,) * (length - len(_a))
    _b = _b + (0,) * (length - len(_b))
    return (_a > _b) - (_a < _b)
