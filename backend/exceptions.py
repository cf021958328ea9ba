"""NFS export exception hierarchy.

Maps exportfs/sudo error output to structured exceptions with HTTP status codes.
Used by route handlers to return appropriate error responses.
"""

import re


class NFSError(Exception):
    """Base exception for all exportfs command failures."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        output: str = "",
        returncode: int = 1,
        command: list[str] | None = None,
    ) -> None:
        self.message = message
        self.output = output
        self.returncode = returncode
        self.command = list(command) if command else []
        super().__init__(message)


class NFSPermissionError(NFSError):
    """Insufficient privileges, even after escalating with sudo."""

    status_code = 403


class NFSNotFoundError(NFSError):
    """Export path or executable does not exist."""

    status_code = 404


class NFSInvalidArgumentError(NFSError):
    """exportfs rejected an option keyword or client specification."""

    status_code = 400


# --- Output pattern matching ---
# Ordered by specificity; first match wins.
_ERROR_PATTERNS: list[tuple[re.Pattern[str], type[NFSError]]] = [
    (re.compile(r"permission denied", re.IGNORECASE), NFSPermissionError),
    (re.compile(r"operation not permitted", re.IGNORECASE), NFSPermissionError),
    (re.compile(r"a password is required", re.IGNORECASE), NFSPermissionError),
    (re.compile(r"a terminal is required", re.IGNORECASE), NFSPermissionError),
    (re.compile(r"not in the sudoers", re.IGNORECASE), NFSPermissionError),
    (re.compile(r"no such file or directory", re.IGNORECASE), NFSNotFoundError),
    (re.compile(r"failed to stat", re.IGNORECASE), NFSNotFoundError),
    (re.compile(r"command not found", re.IGNORECASE), NFSNotFoundError),
    (re.compile(r"unknown keyword", re.IGNORECASE), NFSInvalidArgumentError),
    (re.compile(r"invalid option", re.IGNORECASE), NFSInvalidArgumentError),
    (re.compile(r"bad option", re.IGNORECASE), NFSInvalidArgumentError),
    (re.compile(r"invalid host", re.IGNORECASE), NFSInvalidArgumentError),
    (re.compile(r"unknown host", re.IGNORECASE), NFSInvalidArgumentError),
]


def parse_exportfs_error(
    output: str,
    returncode: int = 1,
    command: list[str] | None = None,
) -> NFSError:
    """Build the error surfaced after the sudo retry also failed.

    Scans the combined output for known patterns and returns a specific
    exception type, falling back to base NFSError. The message names the
    command and carries the first line of its output.
    """
    first_line = output.strip().split("\n")[0] if output.strip() else "Unknown exportfs error"
    message = f"Command {' '.join(command or [])} failed with sudo as well: {first_line}"

    exc_class = NFSError
    for pattern, candidate in _ERROR_PATTERNS:
        if pattern.search(output):
            exc_class = candidate
            break

    return exc_class(message=message, output=output, returncode=returncode, command=command)
