"""Shared command runner for exportfs invocations.

All subprocess calls go through run_cmd(), which returns combined
stdout+stderr and the return code. run_and_retry_with_sudo() runs a
prepared command line and, if it fails, runs it once more under
``sudo -n``.
"""

import logging
import subprocess
from collections.abc import Callable, Sequence

from exceptions import parse_exportfs_error

logger = logging.getLogger(__name__)

SUDO_PREFIX = ("sudo", "-n")

# (name, *args) -> (combined output, returncode)
Command = Callable[..., tuple[str, int]]


def run_cmd(name: str, *args: str) -> tuple[str, int]:
    """Run a command, blocking until it exits.

    Returns (output, returncode) with stderr folded into stdout and decoded
    leniently. A process that cannot be started is reported rather than
    raised: 127 for a missing executable, 126 for any other OS error.
    """
    cmd = [name, *args]
    logger.debug("Running command: %s", " ".join(cmd))
    try:
        proc = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
    except FileNotFoundError:
        logger.error("Command not found: %s", name)
        return f"{name}: command not found", 127
    except OSError as exc:
        logger.error("Could not run %s: %s", name, exc)
        return f"{name}: {exc.strerror or exc}", 126
    return proc.stdout.decode(errors="replace"), proc.returncode


def run_and_retry_with_sudo(cmd_line: Sequence[str], command: Command = run_cmd) -> None:
    """Run ``cmd_line``; on failure retry it once as ``sudo -n <cmd_line>``.

    Raises NFSError (or a subclass) describing the sudo attempt if that
    fails too. The first failure is only logged.
    """
    if not cmd_line:
        raise ValueError("Empty command line")

    output, rc = command(*cmd_line)
    if rc == 0:
        return

    logger.warning("Command %s failed (rc=%d): %s", " ".join(cmd_line), rc, output.strip())
    logger.info("Retrying with sudo")

    elevated = [*SUDO_PREFIX, *cmd_line]
    output, rc = command(*elevated)
    if rc != 0:
        raise parse_exportfs_error(output, rc, command=elevated)
