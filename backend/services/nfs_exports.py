"""NFS export management via exportfs.

Exports and unexports a path to a single host on the running server. Nothing
is written to /etc/exports, so changes do not survive a reboot or an
``exportfs -ra``.
"""

import logging
from collections.abc import Callable, Sequence

from services.cmd import Command, run_and_retry_with_sudo, run_cmd
from services.nfs_options import Option, exportfs_command_line, unexportfs_command_line

logger = logging.getLogger(__name__)

Retrier = Callable[[Sequence[str], Command], None]


class NFSManager:
    """Builds exportfs command lines and hands them to a retrier.

    ``command`` spawns processes and ``retrier`` decides how failures are
    retried; both can be replaced, e.g. with fakes in tests.
    """

    def __init__(self, command: Command = run_cmd, retrier: Retrier = run_and_retry_with_sudo) -> None:
        self.command = command
        self.retrier = retrier

    def export(self, path: str, host: str, *options: Option) -> None:
        """Export ``path`` to ``host`` with the given options."""
        self.retrier(exportfs_command_line(path, host, options), self.command)
        logger.info("Exported %s to %s", path, host)

    def unexport(self, path: str, host: str) -> None:
        """Stop exporting ``path`` to ``host``."""
        self.retrier(unexportfs_command_line(path, host), self.command)
        logger.info("Unexported %s from %s", path, host)
