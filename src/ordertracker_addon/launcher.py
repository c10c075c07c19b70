"""Hand control to the Order Tracker binary.

On POSIX the current process image is replaced (same PID, inherited
environment). Elsewhere the binary runs as a child: SIGINT/SIGTERM are
forwarded to it and its exit code is propagated.
"""

import os
import signal
import subprocess
from dataclasses import dataclass, field
from typing import NoReturn

from .config import EXIT_NOT_EXECUTABLE, EXIT_NOT_FOUND
from .telemetry import get_logger

logger = get_logger(__name__)

_FORWARDED_SIGNALS = tuple(
    sig
    for sig in (
        signal.SIGINT,
        signal.SIGTERM,
        getattr(signal, "SIGBREAK", None),  # Windows only
    )
    if sig is not None
)

# Popen.send_signal on Windows only accepts SIGTERM and the console control events
_WINDOWS_SIGNAL_EVENTS: dict[int, int] = {}
if os.name == "nt":
    _WINDOWS_SIGNAL_EVENTS = {
        signal.SIGINT: signal.CTRL_C_EVENT,
        signal.SIGBREAK: signal.CTRL_BREAK_EVENT,
    }


@dataclass(frozen=True)
class LaunchPlan:
    """Everything needed to start the target process"""

    executable: str
    args: tuple[str, ...]
    exports: dict[str, str] = field(default_factory=dict)  # whitelisted keys set by us
    env: dict[str, str] = field(default_factory=dict)  # full child environment

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]


class LaunchError(OSError):
    """Target could not be started.

    Attributes:
        exit_code: Shell-style exit code (126 not executable, 127 not found)
    """

    def __init__(self, message: str, exit_code: int):
        super().__init__(message)
        self.exit_code = exit_code


def _launch_error(error: Exception, executable: str) -> LaunchError:
    if isinstance(error, FileNotFoundError):
        return LaunchError(f"{executable}: not found", EXIT_NOT_FOUND)
    reason = getattr(error, "strerror", None) or error
    return LaunchError(f"{executable}: cannot execute: {reason}", EXIT_NOT_EXECUTABLE)


def _child_signal(signum: int) -> int:
    """Translate a received signal into one the child can be sent"""
    return _WINDOWS_SIGNAL_EVENTS.get(signum, signum)


def exec_replace(plan: LaunchPlan) -> NoReturn:
    """Replace the current process with the target.

    Raises:
        LaunchError: If the exec call fails
    """
    logger.debug(f"exec {' '.join(plan.argv)}")
    try:
        os.execve(plan.executable, plan.argv, plan.env)
    except (OSError, ValueError) as e:
        # ValueError: embedded NUL in argv or env
        raise _launch_error(e, plan.executable) from e


def spawn_and_wait(plan: LaunchPlan) -> int:
    """Run the target as a child, forwarding signals until it exits.

    Returns:
        Child exit code; death by signal N is reported as 128 + N.

    Raises:
        LaunchError: If the child cannot be spawned
    """
    logger.debug(f"spawn {' '.join(plan.argv)}")
    try:
        proc = subprocess.Popen(plan.argv, env=plan.env)
    except (OSError, ValueError) as e:
        raise _launch_error(e, plan.executable) from e

    def _forward(signum, frame):
        logger.debug(f"Forwarding signal {signum} to pid {proc.pid}")
        try:
            proc.send_signal(_child_signal(signum))
        except (OSError, ValueError) as e:
            logger.warning(f"Cannot forward signal {signum} ({e}); terminating pid {proc.pid}")
            proc.terminate()

    previous = {sig: signal.signal(sig, _forward) for sig in _FORWARDED_SIGNALS}
    try:
        returncode = proc.wait()
    except BaseException:
        # Never leave the child running behind us
        proc.kill()
        proc.wait()
        raise
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    if returncode < 0:
        return 128 - returncode
    return returncode


def launch(plan: LaunchPlan, replace: bool | None = None) -> int:
    """Start the target, by exec-replace where the platform supports it.

    Args:
        plan: Launch plan
        replace: Force exec-replace (True) or spawn (False); default by platform

    Returns:
        Child exit code (spawn mode only; exec-replace does not return)
    """
    if replace is None:
        replace = os.name == "posix"

    if replace:
        return exec_replace(plan)
    return spawn_and_wait(plan)
