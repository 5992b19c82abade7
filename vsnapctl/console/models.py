# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/console/models.py
"""Value types shared by the endpoint client and the console core."""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T")

GuestSpec = str


@dataclass(frozen=True)
class Credentials:
    user: str
    password: str = field(repr=False)


@dataclass
class EndpointSession:
    """One authenticated connection to a management endpoint."""

    host: str
    user: str = ""
    connected: bool = True
    handle: Any = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class GuestHandle:
    name: str
    ref: Any = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class SnapshotRecord:
    guest: GuestHandle
    name: str
    created: Optional[_dt.datetime] = None
    description: str = ""
    ref: Any = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class GuestBatch:
    """Resolved guests, in the order the operator listed them."""

    guests: Tuple[GuestHandle, ...] = ()

    def __iter__(self) -> Iterator[GuestHandle]:
        return iter(self.guests)

    def __len__(self) -> int:
        return len(self.guests)

    def __bool__(self) -> bool:
        return bool(self.guests)

    def names(self) -> Tuple[str, ...]:
        return tuple(g.name for g in self.guests)


@dataclass(frozen=True)
class GuestResult(Generic[T]):
    """
    Outcome of one batch operation step for one guest.

    skipped marks a guest with nothing to act on (e.g. no snapshot to delete);
    it is neither a success with a value nor an error.
    """

    guest: GuestHandle
    value: Optional[T] = None
    error: Optional[BaseException] = None
    skipped: bool = False
    note: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None and not self.skipped
