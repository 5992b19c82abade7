# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/__main__.py
from __future__ import annotations

import sys
import traceback
from typing import Optional

from .cli.args import parse_args_with_config
from .console.prompts import Prompter
from .console.render import Renderer
from .console.session import SessionController
from .core.exceptions import Fatal, format_exception_for_cli
from .vmware.clients.client import VMwareClient
from .vmware.vmware_utils import create_console


def _print_stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def _safe_log(logger, level: str, msg: str) -> None:
    if logger is None:
        _print_stderr(msg)
        return

    fn = getattr(logger, level, None)
    if callable(fn):
        fn(msg)
    else:
        _print_stderr(msg)


def main() -> None:
    logger: Optional[object] = None

    # Phase 1: parse (Fatal can happen here)
    try:
        args, _conf, logger = parse_args_with_config()
    except Fatal as e:
        # The parse layer logs its own errors (U.die, validation).
        raise SystemExit(getattr(e, "code", 1))
    except KeyboardInterrupt:
        _safe_log(logger, "warning", "Interrupted by user (Ctrl+C).")
        raise SystemExit(130)

    # Phase 2: interactive session
    try:
        endpoint = VMwareClient(
            logger,
            port=args.port,
            insecure=args.insecure,
            timeout=args.timeout,
            description=args.description,
            memory=args.memory,
            quiesce=args.quiesce,
        )
        console = create_console()
        rc = SessionController(
            endpoint,
            args.vcenter,
            args.guest_specs,
            prompter=Prompter(console),
            renderer=Renderer(console),
            logger=logger,
            user=args.user,
            strict_guests=args.strict_guests,
        ).run()
    except Fatal as e:
        _safe_log(logger, "error", format_exception_for_cli(e, verbose=args.verbose))
        rc = getattr(e, "code", 1)
    except KeyboardInterrupt:
        _safe_log(logger, "warning", "Interrupted by user (Ctrl+C).")
        rc = 130
    except Exception as e:
        _safe_log(logger, "error", f"UNHANDLED {type(e).__name__}: {e}")
        _safe_log(logger, "debug", traceback.format_exc())
        rc = 1

    raise SystemExit(rc)


if __name__ == "__main__":
    main()
