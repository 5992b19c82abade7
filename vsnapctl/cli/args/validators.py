# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/cli/args/validators.py
from __future__ import annotations

import argparse
from typing import Any

from ...console.batch import split_guest_list
from ...core.exceptions import Fatal
from ...vmware.errors import ExitCode


def _require(v: Any) -> bool:
    return v is not None and str(v).strip() != ""


def validate_args(args: argparse.Namespace, logger: Any = None) -> None:
    """
    Usage checks that must pass before any connection attempt.

    Sets args.guest_specs to the split, de-duplicated guest list.
    """
    if not _require(getattr(args, "vcenter", None)):
        raise Fatal(code=ExitCode.USAGE, msg="vCenter hostname must not be empty")
    if not _require(getattr(args, "guests", None)):
        raise Fatal(code=ExitCode.USAGE, msg="Guest list must not be empty")

    args.vcenter = str(args.vcenter).strip()
    args.guest_specs = split_guest_list(str(args.guests), logger)

    port = getattr(args, "port", 443)
    try:
        port = int(port)
    except (TypeError, ValueError):
        raise Fatal(code=ExitCode.USAGE, msg=f"Invalid port: {port!r}")
    if not 0 < port < 65536:
        raise Fatal(code=ExitCode.USAGE, msg=f"Port out of range: {port}")
    args.port = port

    timeout = getattr(args, "timeout", None)
    if timeout is not None:
        try:
            args.timeout = float(timeout)
        except (TypeError, ValueError):
            raise Fatal(code=ExitCode.USAGE, msg=f"Invalid timeout: {timeout!r}")
        if args.timeout <= 0:
            raise Fatal(code=ExitCode.USAGE, msg=f"Timeout must be positive: {timeout}")
