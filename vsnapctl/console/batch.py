# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/console/batch.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

from ..core.exceptions import Fatal, VMwareError, wrap_vmware
from ..core.logger import Log
from ..vmware.endpoint import EndpointClient
from ..vmware.errors import ExitCode
from .models import EndpointSession, GuestBatch, GuestHandle, GuestSpec


def split_guest_list(text: str, logger: Any = None) -> List[GuestSpec]:
    """
    Split the operator's comma-separated guest list.

    Names are trimmed; an empty entry anywhere is a usage error. Repeated
    names are kept once, at their first position.
    """
    parts = [p.strip() for p in (text or "").split(",")]
    if not parts or any(not p for p in parts):
        raise Fatal(code=ExitCode.USAGE, msg=f"Invalid guest list {text!r}: empty guest name")

    specs: List[GuestSpec] = []
    for p in parts:
        if p in specs:
            if logger is not None:
                logger.warning("Guest %r listed more than once; using it once", p)
            continue
        specs.append(p)
    return specs


@dataclass
class ResolutionReport:
    batch: GuestBatch
    failures: List[Tuple[GuestSpec, BaseException]] = field(default_factory=list)


class GuestBatchResolver:
    """
    Resolves guest names to handles, in order.

    Every name is attempted and every failure is reported. Whether failures
    end the session is the caller's decision (see `strict`).
    """

    def __init__(
        self,
        endpoint: EndpointClient,
        session: EndpointSession,
        renderer: Any,
        logger: logging.Logger,
        *,
        strict: bool = False,
    ):
        self.endpoint = endpoint
        self.session = session
        self.renderer = renderer
        self.logger = logger
        self.strict = bool(strict)

    def resolve(self, specs: Sequence[GuestSpec]) -> ResolutionReport:
        handles: List[GuestHandle] = []
        failures: List[Tuple[GuestSpec, BaseException]] = []

        for name in specs:
            log = Log.bind(self.logger, guest=name)
            try:
                handle = self.endpoint.resolve_guest(self.session, name)
            except Exception as e:
                err = e if isinstance(e, VMwareError) else wrap_vmware(f"Lookup of {name!r} failed: {e}", e)
                failures.append((name, err))
                Log.fail(log, f"Could not resolve guest: {err}")
                self.renderer.error(f"Guest {name}: {err}")
                continue
            handles.append(handle)
            log.debug("Resolved guest")

        report = ResolutionReport(batch=GuestBatch(tuple(handles)), failures=failures)

        if failures and self.strict:
            names = ", ".join(n for n, _ in failures)
            raise Fatal(code=ExitCode.NOT_FOUND, msg=f"Guest resolution failed for: {names}")

        if not report.batch:
            raise Fatal(code=ExitCode.NOT_FOUND, msg="None of the requested guests could be resolved")

        if failures:
            self.renderer.warn(
                f"Continuing with {len(report.batch)} of {len(specs)} guests; "
                f"{len(failures)} could not be resolved."
            )

        return report
