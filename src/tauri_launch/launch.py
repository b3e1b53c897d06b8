"""CLI entry point that runs the tauri CLI with the caller's arguments."""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import sys
from dataclasses import dataclass
from typing import Mapping, NoReturn, Sequence

from tauri_launch.utils import (
    COMMAND_NOT_FOUND,
    LauncherConfig,
    child_environment,
    command_on_path,
    configure_logging,
    shell_command,
)

log = logging.getLogger(__name__)


class LaunchError(RuntimeError):
    """The child process could not be started."""


@dataclass(frozen=True)
class ChildExit:
    """Termination result of the child. ``returncode`` is None when it was signaled."""

    returncode: int | None

    @classmethod
    def from_returncode(cls, returncode: int | None) -> "ChildExit":
        # asyncio reports death by signal N as -N on POSIX
        if returncode is None or returncode < 0:
            return cls(None)
        return cls(returncode)

    @property
    def signaled(self) -> bool:
        return self.returncode is None

    @property
    def exit_code(self) -> int:
        return 0 if self.returncode is None else self.returncode


async def launch(
    args: Sequence[str],
    environ: Mapping[str, str],
    config: LauncherConfig | None = None,
) -> ChildExit:
    """Spawn the tauri CLI through the shell and wait for it to terminate.

    The child inherits stdin, stdout and stderr and receives *args* unchanged.
    Raises LaunchError if the process cannot be created.
    """
    config = config or LauncherConfig.from_env(environ)
    cmdline = shell_command(config.command, args)
    env = child_environment(environ)
    log.debug("Launching: %s", cmdline)

    loop = asyncio.get_running_loop()
    ignore_sigint = os.name != "nt"
    if ignore_sigint:
        # The terminal delivers Ctrl-C to the child as well; let it decide.
        # exec resets the handler in the child, so install it before spawning.
        loop.add_signal_handler(signal.SIGINT, lambda: None)
    try:
        try:
            proc = await asyncio.create_subprocess_shell(
                cmdline,
                stdin=None,
                stdout=None,
                stderr=None,
                env=env,
            )
        except OSError as e:
            raise LaunchError(f"failed to launch {config.command!r}: {e}") from e
        returncode = await proc.wait()
    finally:
        if ignore_sigint:
            loop.remove_signal_handler(signal.SIGINT)

    result = ChildExit.from_returncode(returncode)
    if result.returncode == COMMAND_NOT_FOUND and not command_on_path(config.command, env):
        log.debug("%r not found on PATH", config.command)
    log.debug("Child exited: returncode=%s signaled=%s", returncode, result.signaled)
    return result


def run(args: Sequence[str], environ: Mapping[str, str] | None = None) -> NoReturn:
    """Run the tauri CLI with *args* and exit with its exit code."""
    if environ is None:
        environ = os.environ
    result = asyncio.run(launch(list(args), environ))
    sys.exit(result.exit_code)


def main() -> NoReturn:
    config = LauncherConfig.from_env(os.environ)
    configure_logging(config.log_level)
    try:
        run(sys.argv[1:])
    except LaunchError as e:
        log.error("%s", e)
        sys.exit(COMMAND_NOT_FOUND)


if __name__ == "__main__":
    main()
