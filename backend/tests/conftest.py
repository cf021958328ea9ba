"""Shared fixtures for the NFS Export Manager test suite.

Provides:
- sys.path setup so imports work like the backend does (from services.cmd, etc.)
- Fake process spawners (no real exportfs or sudo is ever run)
- FastAPI TestClient with the NFSManager dependency replaced by a mock
"""

import sys
import os
from unittest.mock import MagicMock

import pytest

# --- Path setup: backend/ must be on sys.path so bare imports work ---
BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from services.nfs_exports import NFSManager


PERMISSION_DENIED = (
    "exportfs: could not open /var/lib/nfs/.etab.lock for locking: "
    "errno 13 (Permission denied)\n"
)
SUDO_PASSWORD_REQUIRED = "sudo: a password is required\n"


# ---------------------------------------------------------------------------
# Fake spawners -- same signature as services.cmd.run_cmd
# ---------------------------------------------------------------------------

@pytest.fixture
def succeed():
    """Every command exits 0."""
    return MagicMock(return_value=("", 0))


@pytest.fixture
def fail():
    """Every command fails; the sudo attempt fails for lack of a password."""
    def _fail(name, *args):
        if name == "sudo":
            return SUDO_PASSWORD_REQUIRED, 1
        return PERMISSION_DENIED, 1
    return MagicMock(side_effect=_fail)


@pytest.fixture
def succeed_only_with_sudo():
    """Commands only succeed when run under sudo."""
    def _command(name, *args):
        if name == "sudo":
            return "", 0
        return PERMISSION_DENIED, 1
    return MagicMock(side_effect=_command)


# ---------------------------------------------------------------------------
# FastAPI TestClient with the manager mocked out
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_manager():
    """A MagicMock standing in for NFSManager; export/unexport return None."""
    return MagicMock(spec=NFSManager)


@pytest.fixture
def client(mock_manager):
    """Provide a synchronous httpx TestClient for the FastAPI app.

    Import happens inside the fixture so sys.path is already configured.
    """
    from fastapi.testclient import TestClient
    from main import app
    from routes.exports import get_manager

    app.dependency_overrides[get_manager] = lambda: mock_manager

    with TestClient(app, raise_server_exceptions=False) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Headers required for mutating requests (CSRF protection)."""
    return {"X-Requested-With": "XMLHttpRequest"}
