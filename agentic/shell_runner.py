"""Run shell commands, optionally echoing their output as it arrives."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import sys
import threading
import time
from dataclasses import dataclass
from typing import IO

from termcolor import colored

logger = logging.getLogger(__name__)

_IS_WINDOWS = os.name == "nt"

DANGEROUS_PATTERNS = (
    "rm -rf /",
    "del /s /q c:",
    "format c:",
    "shutdown",
    "reboot",
    "dd if=",
    "mkfs.",
    "> /dev/",
    "chmod 777 /",
    "chown root /",
)


@dataclass(frozen=True)
class ExecutionSuccess:
    """A command that exited with status zero; duration is in seconds."""

    stdout: str
    stderr: str
    duration: float


@dataclass(frozen=True)
class ExecutionError:
    """A command that exited with a non-zero status; duration is in seconds."""

    stderr: str
    exit_code: int
    duration: float


ExecutionResult = ExecutionSuccess | ExecutionError


class ShellRunnerError(Exception):
    """A command could not be started, waited for, or finished in time."""


class DangerousCommandError(ShellRunnerError):
    """A command matched a dangerous pattern and was refused."""


def _pump(stream: IO[str], collected: list[str], to_stderr: bool) -> None:
    for raw in stream:
        line = raw.rstrip("\n")
        if line.endswith("\r"):
            line = line[:-1]
        collected.append(line)
        if to_stderr:
            print(colored(line, "yellow"), file=sys.stderr, flush=True)
        else:
            print(line, file=sys.stdout, flush=True)
    stream.close()


def _exit_code(returncode: int) -> int:
    return -1 if returncode < 0 else returncode


def _build_result(returncode: int, stdout: str, stderr: str, duration: float) -> ExecutionResult:
    if returncode == 0:
        return ExecutionSuccess(stdout=stdout, stderr=stderr, duration=duration)
    return ExecutionError(stderr=stderr, exit_code=_exit_code(returncode), duration=duration)


def _kill(process: subprocess.Popen) -> None:
    if not _IS_WINDOWS:
        try:
            os.killpg(process.pid, signal.SIGKILL)
            return
        except (ProcessLookupError, PermissionError):
            pass
    process.kill()


@dataclass
class ShellRunner:
    """Executes commands through the platform shell."""

    streaming: bool = True

    def shell_command(self, command: str) -> tuple[str, list[str]]:
        """Return the shell program and its arguments for running a command."""
        if _IS_WINDOWS:
            return "powershell", ["-Command", command]
        return "bash", ["-c", command]

    def execute(self, command: str) -> ExecutionResult:
        return self._run(command, None)

    def execute_with_timeout(self, command: str, timeout: float) -> ExecutionResult:
        """Run a command, killing it and raising ShellRunnerError after timeout seconds."""
        return self._run(command, timeout)

    def execute_in_dir(self, command: str, directory: str) -> ExecutionResult:
        """Run a command after changing into a directory, collecting its output."""
        logger.debug("Executing command in %s: %s", directory, command)
        separator = ";" if _IS_WINDOWS else " &&"
        full_command = f"cd '{directory}'{separator} {command}"
        shell, args = self.shell_command(full_command)
        start = time.perf_counter()
        process = self._spawn(
            shell, args, f"Failed to execute command in directory '{directory}'", False
        )
        return self._collect(process, start, None)

    def is_dangerous_command(self, command: str) -> bool:
        lowered = command.lower()
        return any(pattern in lowered for pattern in DANGEROUS_PATTERNS)

    def execute_safely(self, command: str) -> ExecutionResult:
        if self.is_dangerous_command(command):
            raise DangerousCommandError(
                f"Refusing to execute potentially dangerous command: {command}"
            )
        return self.execute(command)

    def _run(self, command: str, timeout: float | None) -> ExecutionResult:
        logger.debug("Executing command: %s", command)
        shell, args = self.shell_command(command)
        start = time.perf_counter()
        process = self._spawn(
            shell, args, f"Failed to spawn command '{command}'", timeout is not None
        )
        if self.streaming:
            return self._stream(process, start, timeout)
        return self._collect(process, start, timeout)

    @staticmethod
    def _spawn(
        shell: str, args: list[str], failure: str, own_group: bool
    ) -> subprocess.Popen:
        try:
            return subprocess.Popen(
                [shell, *args],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=own_group and not _IS_WINDOWS,
            )
        except OSError as exc:
            raise ShellRunnerError(f"{failure}: {exc}") from exc

    @staticmethod
    def _timed_out(timeout: float) -> ShellRunnerError:
        return ShellRunnerError(f"Command timed out after {timeout:.2f}s")

    def _stream(
        self, process: subprocess.Popen, start: float, timeout: float | None
    ) -> ExecutionResult:
        stdout_lines: list[str] = []
        stderr_lines: list[str] = []
        readers = [
            threading.Thread(
                target=_pump,
                args=(self._text(process.stdout), stdout_lines, False),
                daemon=True,
            ),
            threading.Thread(
                target=_pump,
                args=(self._text(process.stderr), stderr_lines, True),
                daemon=True,
            ),
        ]
        for reader in readers:
            reader.start()
        try:
            returncode = process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            _kill(process)
            process.wait()
            for reader in readers:
                reader.join()
            raise self._timed_out(timeout) from None
        for reader in readers:
            reader.join()
        duration = time.perf_counter() - start
        return _build_result(
            returncode, "\n".join(stdout_lines), "\n".join(stderr_lines), duration
        )

    def _collect(
        self, process: subprocess.Popen, start: float, timeout: float | None
    ) -> ExecutionResult:
        try:
            stdout, stderr = process.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            _kill(process)
            process.communicate()
            raise self._timed_out(timeout) from None
        duration = time.perf_counter() - start
        return _build_result(
            process.returncode,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
            duration,
        )

    @staticmethod
    def _text(stream: IO[bytes]) -> IO[str]:
        import io

        return io.TextIOWrapper(stream, encoding="utf-8", errors="replace", newline="")