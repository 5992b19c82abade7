# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for exit-code classification."""
from __future__ import annotations

import errno
import socket

import pytest

from vsnapctl.core.exceptions import AuthError, NotFoundError, OperationError, VMwareError
from vsnapctl.vmware.errors import ExitCode, classify_exit_code


@pytest.mark.unit
class TestClassifyExitCode:
    def test_typed_errors(self):
        assert classify_exit_code(AuthError(msg="rejected")) is ExitCode.AUTH
        assert classify_exit_code(NotFoundError(msg="gone")) is ExitCode.NOT_FOUND

    def test_auth_by_message(self):
        e = VMwareError(msg="Cannot complete login due to an incorrect user name or password.")
        assert classify_exit_code(e) is ExitCode.AUTH

    def test_network_cause(self):
        e = VMwareError(msg="Failed to connect to vSphere vc:443", cause=ConnectionRefusedError(errno.ECONNREFUSED, "x"))
        assert classify_exit_code(e) is ExitCode.NETWORK

    def test_network_by_message(self):
        assert classify_exit_code(VMwareError(msg="SSL handshake failed")) is ExitCode.NETWORK
        assert classify_exit_code(socket.timeout("timed out")) is ExitCode.NETWORK

    def test_other_vmware_error_is_api(self):
        assert classify_exit_code(OperationError(msg="task error: disk locked")) is ExitCode.VSPHERE_API

    def test_interrupt_and_unknown(self):
        assert classify_exit_code(KeyboardInterrupt()) is ExitCode.INTERRUPTED
        assert classify_exit_code(ValueError("odd")) is ExitCode.UNKNOWN

    def test_code_values(self):
        assert int(ExitCode.OK) == 0
        assert int(ExitCode.USAGE) == 2
        assert int(ExitCode.INTERRUPTED) == 130
