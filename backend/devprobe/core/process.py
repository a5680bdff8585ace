"""
Script runner: run one shell command with the user's global npm bin directory
appended to PATH, and return its exit status and decoded output.

Platform differences (shell, PATH separator, npm directory) live in a
ShellPlatform record resolved once per call so tests can pass either one.
"""

import asyncio
import logging
import os
import sys
from collections.abc import Mapping
from typing import NamedTuple

from devprobe.core.errors import ProbeError
from devprobe.schemas import ProcessOutput

_log = logging.getLogger(__name__)

HOME_ENV_VARS = ("HOME", "USERPROFILE")
SIGNAL_STATUS = -1


class ShellPlatform(NamedTuple):
    shell: str
    command_flag: str
    path_separator: str
    dir_separator: str
    tool_dir_parts: tuple[str, ...]  # relative to the home directory

    def tool_dir(self, home: str) -> str:
        return self.dir_separator.join((home, *self.tool_dir_parts))


WINDOWS = ShellPlatform(
    shell="cmd",
    command_flag="/C",
    path_separator=";",
    dir_separator="\\",
    tool_dir_parts=("AppData", "Roaming", "npm"),
)
POSIX = ShellPlatform(
    shell="sh",
    command_flag="-c",
    path_separator=":",
    dir_separator="/",
    tool_dir_parts=(".npm-global", "bin"),
)


def current_platform() -> ShellPlatform:
    return WINDOWS if sys.platform == "win32" else POSIX


def resolve_home(environ: Mapping[str, str]) -> str:
    """First of HOME / USERPROFILE that is set; empty string if neither."""
    for name in HOME_ENV_VARS:
        value = environ.get(name)
        if value is not None:
            return value
    return ""


def build_environment(
    platform: ShellPlatform, environ: Mapping[str, str] | None = None
) -> dict[str, str]:
    """
    Copy of the parent environment with the npm bin directory appended to PATH.

    The separator is always appended, even when PATH is empty or unset.
    os.environ itself is never modified.
    """
    env = dict(os.environ if environ is None else environ)
    tool_dir = platform.tool_dir(resolve_home(env))
    env["PATH"] = env.get("PATH", "") + platform.path_separator + tool_dir
    return env


def _exit_status(returncode: int | None) -> int:
    # asyncio reports death by signal N as -N
    if returncode is None or returncode < 0:
        return SIGNAL_STATUS
    return returncode


async def run_script(
    script: str,
    *,
    platform: ShellPlatform | None = None,
    environ: Mapping[str, str] | None = None,
) -> ProcessOutput:
    """
    Run *script* through the platform shell and wait for it to finish.

    A non-zero exit is returned in ProcessOutput.status, not raised. Only a
    failure to start the shell raises ProbeError with the OS error text.
    """
    platform = platform or current_platform()
    env = build_environment(platform, environ)

    try:
        proc = await asyncio.create_subprocess_exec(
            platform.shell,
            platform.command_flag,
            script,
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        _log.warning("Failed to spawn %s: %s", platform.shell, e)
        raise ProbeError(str(e)) from e

    try:
        stdout, stderr = await proc.communicate()
    except asyncio.CancelledError:
        # caller gave up (timeout, client disconnect): do not leave the shell running
        _log.info("Script cancelled, killing pid %s", proc.pid)
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
        await proc.wait()
        raise
    status = _exit_status(proc.returncode)
    _log.debug("Script exited with status %s", status)
    return ProcessOutput(
        status=status,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
