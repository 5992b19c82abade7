# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/vmware/clients/client.py
from __future__ import annotations

"""
vSphere / vCenter snapshot client for vsnapctl.
"""

import logging
import socket
import ssl
import time
from typing import Any, Iterator, List, Optional

from ...console.models import Credentials, EndpointSession, GuestHandle, SnapshotRecord
from ...core import optional_imports as oi
from ...core.exceptions import AuthError, NotFoundError, OperationError, VMwareError
from ..endpoint import EndpointClient

TASK_POLL_INTERVAL_S = 1.0


def _walk_snapshot_tree(nodes: Any) -> Iterator[Any]:
    """Depth-first walk over vim.vm.SnapshotTree nodes (parents before children)."""
    stack = list(reversed(list(nodes or [])))
    while stack:
        node = stack.pop()
        yield node
        kids = getattr(node, "childSnapshotList", None) or []
        stack.extend(reversed(list(kids)))


def _stub_host(si: Any) -> Optional[str]:
    stub = getattr(si, "_stub", None)
    host = getattr(stub, "host", None)
    return str(host) if host else None


def _looks_like_auth_failure(e: BaseException) -> bool:
    invalid_login = getattr(getattr(oi.vim, "fault", None), "InvalidLogin", None) if oi.vim is not None else None
    if isinstance(invalid_login, type) and isinstance(e, invalid_login):
        return True
    msg = (getattr(e, "msg", None) or str(e) or "").lower()
    return "incorrect user name or password" in msg or "invalidlogin" in msg or "invalid login" in msg


def _fault_message(err: Any) -> str:
    return str(getattr(err, "msg", None) or getattr(getattr(err, "fault", None), "msg", None) or err)


class VMwareClient(EndpointClient):
    """
    pyVmomi EndpointClient: guest lookup and snapshot create/list/remove.
    """

    def __init__(
        self,
        logger: logging.Logger,
        *,
        port: int = 443,
        insecure: bool = False,
        timeout: Optional[float] = None,
        description: str = "Created by vsnapctl",
        memory: bool = False,
        quiesce: bool = False,
    ) -> None:
        self.logger = logger
        self.port = int(port)
        self.insecure = bool(insecure)
        self.timeout = timeout
        self.description = description or ""
        self.memory = bool(memory)
        self.quiesce = bool(quiesce)

    # Connection

    def available(self) -> bool:
        return bool(oi.PYVMOMI_AVAILABLE)

    def _require_pyvmomi(self) -> None:
        if not oi.PYVMOMI_AVAILABLE:
            raise VMwareError(code=13, msg="pyvmomi not installed. Install: pip install pyvmomi")

    def _ssl_context(self) -> ssl.SSLContext:
        """
        Create SSL context for vSphere connections.

        SECURITY WARNING: insecure=True disables certificate verification. Only use it
        against endpoints with self-signed certificates on trusted networks.
        """
        if self.insecure:
            self.logger.warning(
                "TLS certificate verification is DISABLED (insecure=True). "
                "Connections are vulnerable to Man-in-the-Middle attacks."
            )
            ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE
            return ctx
        return ssl.create_default_context()

    def _smart_connect(self, host: str, credentials: Credentials) -> Any:
        return oi.SmartConnect(  # type: ignore[misc]
            host=host,
            user=credentials.user,
            pwd=credentials.password,
            port=self.port,
            sslContext=self._ssl_context(),
        )

    def connect(self, host: str, credentials: Credentials) -> EndpointSession:
        self._require_pyvmomi()
        host = (host or "").strip()
        try:
            if self.timeout is not None:
                old_timeout = socket.getdefaulttimeout()
                socket.setdefaulttimeout(self.timeout)
                try:
                    si = self._smart_connect(host, credentials)
                finally:
                    socket.setdefaulttimeout(old_timeout)
            else:
                si = self._smart_connect(host, credentials)
        except Exception as e:
            if _looks_like_auth_failure(e):
                raise AuthError(code=10, msg=f"Authentication to {host} failed: {_fault_message(e)}", cause=e)
            raise VMwareError(msg=f"Failed to connect to vSphere {host}:{self.port}: {e}", cause=e)

        session = EndpointSession(
            host=_stub_host(si) or host,
            user=credentials.user,
            connected=True,
            handle=si,
        )
        self.logger.info("Connected to vSphere: %s:%s as %s", host, self.port, credentials.user)
        return session

    def disconnect(self, session: EndpointSession) -> None:
        if session is None or not session.connected:
            return
        try:
            if session.handle is not None and oi.Disconnect is not None:
                oi.Disconnect(session.handle)  # type: ignore[misc]
                self.logger.info("Disconnected from vSphere: %s", session.host)
        except Exception as e:
            self.logger.error("Error during disconnect: %s", e)
        finally:
            session.connected = False
            session.handle = None

    def _content(self, session: EndpointSession) -> Any:
        if session is None or not session.connected or session.handle is None:
            raise VMwareError(msg="Not connected")
        try:
            return session.handle.RetrieveContent()
        except Exception as e:
            raise VMwareError(msg=f"Failed to retrieve content: {e}", cause=e)

    # Guests

    def resolve_guest(self, session: EndpointSession, name: str) -> GuestHandle:
        n = (name or "").strip()
        if not n:
            raise NotFoundError(code=11, msg="VM not found: empty name")

        content = self._content(session)
        view = content.viewManager.CreateContainerView(content.rootFolder, [oi.vim.VirtualMachine], True)
        try:
            for vm_obj in view.view:
                if getattr(vm_obj, "name", None) == n:
                    return GuestHandle(name=n, ref=vm_obj)
        finally:
            try:
                view.Destroy()
            except Exception as e:
                self.logger.debug("ContainerView.Destroy failed (non-fatal): %s", e)
        raise NotFoundError(code=11, msg=f"VM not found: {n!r}")

    # Snapshots

    def _record(self, guest: GuestHandle, node: Any) -> SnapshotRecord:
        snap = getattr(node, "snapshot", None)
        return SnapshotRecord(
            guest=guest,
            name=str(getattr(node, "name", "") or ""),
            created=getattr(node, "createTime", None),
            description=str(getattr(node, "description", "") or ""),
            ref=snap if snap is not None else node,
        )

    def list_snapshots(self, session: EndpointSession, guest: GuestHandle) -> List[SnapshotRecord]:
        vm = guest.ref
        info = getattr(vm, "snapshot", None)
        roots = getattr(info, "rootSnapshotList", None) if info is not None else None
        records = [self._record(guest, node) for node in _walk_snapshot_tree(roots)]
        # Tree order is kept when any createTime is missing; sort is stable otherwise.
        if all(r.created is not None for r in records):
            records.sort(key=lambda r: r.created)
        return records

    def wait_for_task(self, task: Any, *, what: str) -> Any:
        while str(task.info.state) not in ("success", "error"):
            time.sleep(TASK_POLL_INTERVAL_S)
        if str(task.info.state) == "error":
            raise OperationError(msg=f"{what} failed: {_fault_message(task.info.error)}")
        return getattr(task.info, "result", None)

    def create_snapshot(self, session: EndpointSession, guest: GuestHandle, name: str) -> SnapshotRecord:
        vm = guest.ref
        try:
            task = vm.CreateSnapshot_Task(
                name=name,
                description=self.description,
                memory=self.memory,
                quiesce=self.quiesce,
            )
        except Exception as e:
            raise OperationError(msg=f"Create snapshot {name!r} on {guest.name} failed: {e}", cause=e)

        snap_ref = self.wait_for_task(task, what=f"Create snapshot {name!r} on {guest.name}")

        records = self.list_snapshots(session, guest)
        for r in records:
            if snap_ref is not None and r.ref == snap_ref:
                return r
        same_name = [r for r in records if r.name == name]
        if same_name:
            return same_name[-1]
        return SnapshotRecord(guest=guest, name=name, description=self.description, ref=snap_ref)

    def delete_snapshot(self, session: EndpointSession, record: SnapshotRecord) -> None:
        what = f"Remove snapshot {record.name!r} on {record.guest.name}"
        try:
            task = record.ref.RemoveSnapshot_Task(removeChildren=False)
        except Exception as e:
            raise OperationError(msg=f"{what} failed: {e}", cause=e)
        self.wait_for_task(task, what=what)
