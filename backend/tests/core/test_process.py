"""Tests for core.process: environment building, platform selection, run_script."""

import asyncio
import os
import sys
from pathlib import Path

import pytest

from devprobe.core.errors import ProbeError
from devprobe.core.process import (
    POSIX,
    WINDOWS,
    ShellPlatform,
    build_environment,
    current_platform,
    resolve_home,
    run_script,
)

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses sh")


def _run(coro):
    return asyncio.run(coro)


def _posix_environ(home: Path) -> dict[str, str]:
    return {"HOME": str(home), "PATH": os.environ.get("PATH", "/usr/bin:/bin")}


# --- resolve_home / build_environment ---


def test_resolve_home_prefers_home() -> None:
    assert resolve_home({"HOME": "/home/dev", "USERPROFILE": r"C:\Users\dev"}) == "/home/dev"


def test_resolve_home_falls_back_to_userprofile() -> None:
    assert resolve_home({"USERPROFILE": r"C:\Users\dev"}) == r"C:\Users\dev"


def test_resolve_home_empty_when_unset() -> None:
    assert resolve_home({}) == ""


def test_build_environment_posix() -> None:
    parent = {"HOME": "/home/dev", "PATH": "/usr/bin", "LANG": "C"}
    env = build_environment(POSIX, parent)
    assert env["PATH"] == "/usr/bin:/home/dev/.npm-global/bin"
    assert env["LANG"] == "C"
    assert parent["PATH"] == "/usr/bin"


def test_build_environment_windows() -> None:
    env = build_environment(
        WINDOWS, {"USERPROFILE": r"C:\Users\dev", "PATH": r"C:\Windows"}
    )
    assert env["PATH"] == r"C:\Windows;C:\Users\dev\AppData\Roaming\npm"


def test_build_environment_without_path_or_home() -> None:
    """The separator is appended even when PATH is missing."""
    env = build_environment(POSIX, {})
    assert env["PATH"] == ":/.npm-global/bin"


def test_build_environment_does_not_touch_os_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATH", "/opt/bin")
    monkeypatch.setenv("HOME", "/home/dev")
    env = build_environment(POSIX)
    assert env["PATH"] == "/opt/bin:/home/dev/.npm-global/bin"
    assert os.environ["PATH"] == "/opt/bin"


def test_current_platform(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "platform", "win32")
    assert current_platform() is WINDOWS
    monkeypatch.setattr(sys, "platform", "linux")
    assert current_platform() is POSIX


def test_platform_shells() -> None:
    assert (WINDOWS.shell, WINDOWS.command_flag) == ("cmd", "/C")
    assert (POSIX.shell, POSIX.command_flag) == ("sh", "-c")


# --- run_script ---


@posix_only
def test_run_script_success(tmp_path: Path) -> None:
    out = _run(run_script("echo hello", platform=POSIX, environ=_posix_environ(tmp_path)))
    assert out.status == 0
    assert out.stdout == "hello\n"
    assert out.stderr == ""


@posix_only
def test_run_script_nonzero_exit_is_not_an_error(tmp_path: Path) -> None:
    out = _run(
        run_script("echo oops >&2; exit 3", platform=POSIX, environ=_posix_environ(tmp_path))
    )
    assert out.status == 3
    assert out.stderr == "oops\n"


@posix_only
def test_run_script_killed_by_signal(tmp_path: Path) -> None:
    out = _run(run_script("kill -9 $$", platform=POSIX, environ=_posix_environ(tmp_path)))
    assert out.status == -1


@posix_only
def test_run_script_decodes_invalid_utf8_lossily(tmp_path: Path) -> None:
    out = _run(
        run_script(r"printf 'a\377b'", platform=POSIX, environ=_posix_environ(tmp_path))
    )
    assert out.status == 0
    assert out.stdout == "a\ufffdb"


@posix_only
def test_run_script_sees_npm_bin_on_path(tmp_path: Path) -> None:
    out = _run(run_script('echo "$PATH"', platform=POSIX, environ=_posix_environ(tmp_path)))
    assert out.stdout.strip().endswith(f":{tmp_path}/.npm-global/bin")


@posix_only
def test_run_script_finds_tool_in_npm_bin(tmp_path: Path) -> None:
    bin_dir = tmp_path / ".npm-global" / "bin"
    bin_dir.mkdir(parents=True)
    tool = bin_dir / "devprobe-fake-tool"
    tool.write_text("#!/bin/sh\necho from-npm-bin\n")
    tool.chmod(0o755)
    out = _run(
        run_script("devprobe-fake-tool", platform=POSIX, environ=_posix_environ(tmp_path))
    )
    assert out.status == 0
    assert out.stdout == "from-npm-bin\n"


def test_run_script_spawn_failure_raises(tmp_path: Path) -> None:
    missing = ShellPlatform(
        shell=str(tmp_path / "no-such-shell"),
        command_flag="-c",
        path_separator=":",
        dir_separator="/",
        tool_dir_parts=("bin",),
    )
    with pytest.raises(ProbeError) as exc_info:
        _run(run_script("echo hi", platform=missing, environ={}))
    assert exc_info.value.reason


@posix_only
def test_run_script_concurrent_calls_are_independent(tmp_path: Path) -> None:
    env = _posix_environ(tmp_path)

    async def _both():
        return await asyncio.gather(
            run_script("sleep 0.2; echo a", platform=POSIX, environ=env),
            run_script("echo b; exit 1", platform=POSIX, environ=env),
        )

    a, b = _run(_both())
    assert (a.status, a.stdout) == (0, "a\n")
    assert (b.status, b.stdout) == (1, "b\n")


@posix_only
def test_run_script_cancelled_kills_and_reaps_child(tmp_path: Path) -> None:
    pid_file = tmp_path / "pid"
    script = f'echo $$ > "{pid_file}"; exec sleep 30'

    async def _give_up():
        await asyncio.wait_for(
            run_script(script, platform=POSIX, environ=_posix_environ(tmp_path)),
            timeout=1.0,
        )

    with pytest.raises(asyncio.TimeoutError):
        _run(_give_up())
    pid = int(pid_file.read_text())
    # killed and waited for: not even a zombie is left behind
    with pytest.raises(ProcessLookupError):
        os.kill(pid, 0)
