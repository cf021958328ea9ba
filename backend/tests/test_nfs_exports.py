"""Tests for services/nfs_exports.py — the NFSManager facade.

Covers:
- Default wiring to run_cmd and run_and_retry_with_sudo
- export/unexport hand the right command line and spawner to the retrier
- Retrier errors propagate unchanged
- End to end with fake spawners: plain success, sudo-only success, failure
"""

from unittest.mock import MagicMock, call

import pytest

from exceptions import NFSError, NFSPermissionError
from services.cmd import run_and_retry_with_sudo, run_cmd
from services.nfs_exports import NFSManager
from services.nfs_options import (
    NO_ROOT_SQUASH,
    RW,
    exportfs_command_line,
    fsid,
    replicas,
    unexportfs_command_line,
)


class TestNFSManagerDefaults:

    def test_uses_run_cmd(self):
        assert NFSManager().command is run_cmd

    def test_uses_sudo_retrier(self):
        assert NFSManager().retrier is run_and_retry_with_sudo


# ===================================================================
# Retrier receives the right command line
# ===================================================================


class TestExport:

    @pytest.mark.parametrize("options", [
        (),
        (NO_ROOT_SQUASH,),
        (NO_ROOT_SQUASH, fsid("some-id")),
        (replicas("foo", "bar"),),
    ])
    def test_success(self, options):
        retrier = MagicMock(return_value=None)
        command = MagicMock()
        manager = NFSManager(command=command, retrier=retrier)

        assert manager.export("/foo/bar", "the.client", *options) is None

        retrier.assert_called_once_with(
            exportfs_command_line("/foo/bar", "the.client", options), command,
        )

    def test_failure_propagates(self):
        error = NFSError("Mock failure")
        manager = NFSManager(command=MagicMock(), retrier=MagicMock(side_effect=error))

        with pytest.raises(NFSError) as exc_info:
            manager.export("/foo/bar", "the.client")
        assert exc_info.value is error


class TestUnexport:

    def test_success(self):
        retrier = MagicMock(return_value=None)
        command = MagicMock()
        manager = NFSManager(command=command, retrier=retrier)

        assert manager.unexport("/foo/bar", "the.client") is None

        retrier.assert_called_once_with(unexportfs_command_line("/foo/bar", "the.client"), command)
        assert retrier.call_args[0][0] == ["exportfs", "-u", "the.client:/foo/bar"]

    def test_failure_propagates(self):
        manager = NFSManager(command=MagicMock(), retrier=MagicMock(side_effect=NFSError("Mock failure")))

        with pytest.raises(NFSError, match="Mock failure"):
            manager.unexport("/foo/bar", "the.client")


# ===================================================================
# With the real retrier and fake spawners
# ===================================================================


class TestWithSudoRetrier:

    def test_works_without_sudo(self, succeed):
        NFSManager(command=succeed).export("/srv", "client", RW)
        succeed.assert_called_once_with("exportfs", "client:/srv", "-o", "rw")

    def test_works_with_sudo(self, succeed_only_with_sudo):
        NFSManager(command=succeed_only_with_sudo).export("/srv", "client", RW)
        assert succeed_only_with_sudo.call_args_list[-1] == call(
            "sudo", "-n", "exportfs", "client:/srv", "-o", "rw",
        )

    def test_unexport_works_with_sudo(self, succeed_only_with_sudo):
        NFSManager(command=succeed_only_with_sudo).unexport("/srv", "client")
        assert succeed_only_with_sudo.call_args_list[-1] == call(
            "sudo", "-n", "exportfs", "-u", "client:/srv",
        )

    def test_fails_either_way(self, fail):
        with pytest.raises(NFSPermissionError):
            NFSManager(command=fail).export("/srv", "client")

    def test_unexport_fails_either_way(self, fail):
        with pytest.raises(NFSError):
            NFSManager(command=fail).unexport("/srv", "client")

    def test_calls_are_independent(self, succeed_only_with_sudo):
        manager = NFSManager(command=succeed_only_with_sudo)
        manager.export("/a", "client")
        manager.export("/b", "client")
        # Each call starts without sudo again
        assert [c.args[0] for c in succeed_only_with_sudo.call_args_list] == [
            "exportfs", "sudo", "exportfs", "sudo",
        ]
