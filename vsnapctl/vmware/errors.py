# SPDX-License-Identifier: LGPL-3.0-or-later
# vsnapctl/vmware/errors.py
# -*- coding: utf-8 -*-
"""Exit codes and error classification for vSphere sessions"""
from __future__ import annotations

import errno
import socket
from enum import IntEnum

from ..core.exceptions import AuthError, NotFoundError, VMwareError


class ExitCode(IntEnum):
    OK = 0
    UNKNOWN = 1
    USAGE = 2
    DECLINED = 3

    AUTH = 10
    NOT_FOUND = 11
    NETWORK = 12
    TOOL_MISSING = 13

    VSPHERE_API = 30

    INTERRUPTED = 130


def _is_auth_error(e: BaseException) -> bool:
    if isinstance(e, AuthError):
        return True
    msg = str(e).lower()
    needles = [
        "not authenticated",
        "authentication",
        "invalidlogin",
        "invalid login",
        "incorrect user name or password",
        "unauthorized",
        "forbidden",
        "no permission",
        "access denied",
        "permission denied",
    ]
    return any(n in msg for n in needles)


def _is_not_found_error(e: BaseException) -> bool:
    if isinstance(e, NotFoundError):
        return True
    msg = str(e).lower()
    return "not found" in msg or "does not exist" in msg


def _is_network_error(e: BaseException) -> bool:
    if isinstance(e, (socket.timeout, TimeoutError, ConnectionError)):
        return True
    if isinstance(e, OSError) and e.errno in (
        errno.ECONNREFUSED,
        errno.ETIMEDOUT,
        errno.EHOSTUNREACH,
        errno.ENETUNREACH,
        errno.ECONNRESET,
    ):
        return True
    cause = getattr(e, "cause", None)
    if cause is not None and cause is not e and _is_network_error(cause):
        return True
    msg = str(e).lower()
    needles = [
        "timed out",
        "timeout",
        "connection refused",
        "connection reset",
        "name or service not known",
        "nodename nor servname",
        "temporary failure in name resolution",
        "ssl",
        "handshake",
        "certificate verify failed",
    ]
    return any(n in msg for n in needles)


def classify_exit_code(e: BaseException) -> ExitCode:
    """Map a failure to the exit-code bucket reported to the shell."""
    if isinstance(e, KeyboardInterrupt):
        return ExitCode.INTERRUPTED

    if isinstance(e, VMwareError):
        if _is_auth_error(e):
            return ExitCode.AUTH
        if _is_not_found_error(e):
            return ExitCode.NOT_FOUND
        if _is_network_error(e):
            return ExitCode.NETWORK
        return ExitCode.VSPHERE_API

    if _is_network_error(e):
        return ExitCode.NETWORK

    return ExitCode.UNKNOWN
