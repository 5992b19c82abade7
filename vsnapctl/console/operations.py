# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/console/operations.py
"""
Batch snapshot operations.

Each operation walks the GuestBatch in order and yields one GuestResult per
guest as soon as that guest is done. A failing guest is reported in its
result and the walk moves on to the next guest.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional, TypeVar

from ..core.exceptions import OperationError, VMwareError
from ..core.logger import Log
from ..vmware.endpoint import EndpointClient
from .models import EndpointSession, GuestBatch, GuestHandle, GuestResult, SnapshotRecord

T = TypeVar("T")


class _Skip(Exception):
    """Raised inside a per-guest step when the guest has nothing to act on."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class SnapshotOperations:
    def __init__(
        self,
        endpoint: EndpointClient,
        session: EndpointSession,
        batch: GuestBatch,
        logger: logging.Logger,
    ):
        self.endpoint = endpoint
        self.session = session
        self.batch = batch
        self.logger = logger

    def _fan_out(self, what: str, step: Callable[[GuestHandle], T]) -> Iterator[GuestResult[T]]:
        for guest in self.batch:
            log = Log.bind(self.logger, guest=guest.name, op=what)
            try:
                value = step(guest)
            except _Skip as s:
                Log.warn(log, s.reason)
                yield GuestResult(guest=guest, skipped=True, note=s.reason)
                continue
            except VMwareError as e:
                Log.fail(log, str(e))
                yield GuestResult(guest=guest, error=e)
                continue
            except Exception as e:
                log.debug("Unexpected endpoint error", exc_info=True)
                err = OperationError(msg=f"{what} failed on {guest.name}: {type(e).__name__}: {e}", cause=e)
                Log.fail(log, str(err))
                yield GuestResult(guest=guest, error=err)
                continue
            log.debug("%s done", what)
            yield GuestResult(guest=guest, value=value)

    def _last(self, guest: GuestHandle) -> Optional[SnapshotRecord]:
        records = self.endpoint.list_snapshots(self.session, guest)
        return records[-1] if records else None

    def list_all(self) -> Iterator[GuestResult[List[SnapshotRecord]]]:
        return self._fan_out("list snapshots", lambda g: list(self.endpoint.list_snapshots(self.session, g)))

    def list_last(self) -> Iterator[GuestResult[SnapshotRecord]]:
        def step(guest: GuestHandle) -> SnapshotRecord:
            last = self._last(guest)
            if last is None:
                raise _Skip("no snapshots")
            return last

        return self._fan_out("list last snapshot", step)

    def create(self, name: str) -> Iterator[GuestResult[SnapshotRecord]]:
        def step(guest: GuestHandle) -> SnapshotRecord:
            Log.step(Log.bind(self.logger, guest=guest.name), f"Creating snapshot {name!r}")
            return self.endpoint.create_snapshot(self.session, guest, name)

        return self._fan_out("create snapshot", step)

    def delete_last(self) -> Iterator[GuestResult[SnapshotRecord]]:
        def step(guest: GuestHandle) -> SnapshotRecord:
            last = self._last(guest)
            if last is None:
                raise _Skip("no snapshot to delete")
            Log.step(Log.bind(self.logger, guest=guest.name), f"Deleting snapshot {last.name!r}")
            self.endpoint.delete_snapshot(self.session, last)
            return last

        return self._fan_out("delete last snapshot", step)
