# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/vmware/endpoint.py
"""
Endpoint capability consumed by the console core.

The console never talks to pyVmomi directly; it drives an EndpointClient.
VMwareClient is the production implementation, tests use an in-memory fake.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ..console.models import Credentials, EndpointSession, GuestHandle, SnapshotRecord


class EndpointClient(ABC):
    """Abstract virtualization-management endpoint."""

    @abstractmethod
    def available(self) -> bool:
        """True when the client library needed to talk to the endpoint is importable."""
        ...

    @abstractmethod
    def connect(self, host: str, credentials: Credentials) -> EndpointSession:
        """Authenticate; raises AuthError on rejected credentials, VMwareError otherwise."""
        ...

    @abstractmethod
    def disconnect(self, session: EndpointSession) -> None:
        """Close the session. Idempotent, never raises."""
        ...

    @abstractmethod
    def resolve_guest(self, session: EndpointSession, name: str) -> GuestHandle:
        """Look a guest up by exact name; raises NotFoundError."""
        ...

    @abstractmethod
    def list_snapshots(self, session: EndpointSession, guest: GuestHandle) -> List[SnapshotRecord]:
        """All snapshots of guest, oldest first."""
        ...

    @abstractmethod
    def create_snapshot(self, session: EndpointSession, guest: GuestHandle, name: str) -> SnapshotRecord:
        ...

    @abstractmethod
    def delete_snapshot(self, session: EndpointSession, record: SnapshotRecord) -> None:
        ...
