"""
Shell command execution for deployment scripts.

Two modes:
- run(): output streams straight to the terminal
- run_quiet_unless_failure(): output is captured and only shown when the
  command fails, for noisy tools (helm, oc, kubectl) that should stay quiet
  on success
"""

import shlex
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from .exceptions import CommandError
from .log import get_lg

Command = str | Sequence[str]


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished command."""

    args: tuple[str, ...]
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def _split(cmd: Command) -> list[str]:
    if isinstance(cmd, str):
        return shlex.split(cmd)
    return [str(part) for part in cmd]


def _execute(
    args: list[str],
    capture: bool,
    cwd: str | Path | None,
    env: Mapping[str, str] | None,
) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            args,
            capture_output=capture,
            text=True,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            check=False,
        )
    except (FileNotFoundError, PermissionError) as e:
        raise CommandError(
            f"cannot execute {args[0]}: {e.strerror}", exit_code=127, command=args[0]
        ) from e


def run(
    cmd: Command,
    *,
    check: bool = True,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandResult:
    """
    Run a command with output going to the terminal.

    Args:
        cmd: Argument list, or a string split with shell rules (no shell is spawned)
        check: Raise CommandError on non-zero exit
        cwd: Working directory
        env: Full environment for the child (default: inherit)

    Returns:
        CommandResult with empty stdout/stderr

    Raises:
        CommandError: On non-zero exit (if check) or when the command cannot start
    """
    args = _split(cmd)
    get_lg("shell").debug("running command", extra={"cmd": shlex.join(args)})
    proc = _execute(args, capture=False, cwd=cwd, env=env)
    result = CommandResult(tuple(args), proc.returncode)
    if check and not result.ok:
        raise CommandError(
            f"Command failed with exit code {result.exit_code}",
            exit_code=result.exit_code,
        )
    return result


def run_quiet_unless_failure(
    cmd: Command,
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandResult:
    """
    Run a command with output captured, surfacing it only on failure.

    On non-zero exit the trimmed stdout and stderr are logged at error level
    and CommandError is raised.

    Returns:
        CommandResult holding the captured output

    Raises:
        CommandError: On non-zero exit or when the command cannot start
    """
    lg = get_lg("shell")
    args = _split(cmd)
    lg.debug("running command quietly", extra={"cmd": shlex.join(args)})
    proc = _execute(args, capture=True, cwd=cwd, env=env)
    result = CommandResult(tuple(args), proc.returncode, proc.stdout or "", proc.stderr or "")
    if result.ok:
        return result

    if result.stdout.strip():
        lg.error("[command stdout]:\n" + result.stdout.strip())
    if result.stderr.strip():
        lg.error("[command stderr]:\n" + result.stderr.strip())
    raise CommandError(
        f"Command failed with exit code {result.exit_code}. Output above.",
        exit_code=result.exit_code,
        stdout=result.stdout,
        stderr=result.stderr,
    )
