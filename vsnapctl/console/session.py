# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/console/session.py
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..core.exceptions import Fatal, VMwareError
from ..core.logger import Log
from ..core.utils import U
from ..vmware.endpoint import EndpointClient
from ..vmware.errors import ExitCode, classify_exit_code
from ..vmware.vmware_utils import normalize_host
from .batch import GuestBatchResolver
from .gate import ConfirmationGate
from .loop import CommandLoop
from .models import Credentials, EndpointSession, GuestBatch, GuestSpec
from .operations import SnapshotOperations

_AFFIRMATIVE = ("Y", "YES")


class SessionController:
    """
    One console run: availability check, single-shot connect confirmation,
    credentials, connect, host verification, guest resolution, command loop.

    The endpoint session is disconnected on every path that opened it.
    """

    def __init__(
        self,
        endpoint: EndpointClient,
        host: str,
        guest_specs: Sequence[GuestSpec],
        *,
        prompter: Any,
        renderer: Any,
        logger: logging.Logger,
        user: Optional[str] = None,
        strict_guests: bool = False,
    ):
        self.endpoint = endpoint
        self.host = (host or "").strip()
        self.guest_specs = list(guest_specs)
        self.prompter = prompter
        self.renderer = renderer
        self.logger = logger
        self.user = user
        self.strict_guests = bool(strict_guests)

        self.session: Optional[EndpointSession] = None
        self.batch: GuestBatch = GuestBatch()

    def run(self) -> int:
        try:
            self._run()
            return int(ExitCode.OK)
        except Fatal as e:
            Log.fail(self.logger, e.user_message(include_cause=True))
            self.logger.debug("Fatal detail: %s", U.json_dump(e.to_dict(include_cause=True)))
            self.renderer.error(str(e))
            return e.code
        except KeyboardInterrupt:
            self.logger.warning("Interrupted by user (Ctrl+C).")
            return int(ExitCode.INTERRUPTED)
        finally:
            self._disconnect()

    def _run(self) -> None:
        U.banner(self.logger, f"vsnapctl: {len(self.guest_specs)} guest(s) on {self.host}")
        self._check_available()
        self._confirm_connect()
        self._connect(self._credentials())
        self._verify_host()
        self._resolve_batch()

        ops = SnapshotOperations(self.endpoint, self.session, self.batch, self.logger)
        gate = ConfirmationGate(self.prompter, self.renderer, self.logger)
        CommandLoop(ops, gate, self.prompter, self.renderer, self.logger).run()
        self.renderer.info("Disconnecting. Goodbye.")

    # ---- setup steps ----

    def _check_available(self) -> None:
        if not self.endpoint.available():
            raise Fatal(
                code=ExitCode.TOOL_MISSING,
                msg="vSphere client library (pyvmomi) is not available. Install: pip install pyvmomi",
            )

    def _confirm_connect(self) -> None:
        answer = self.prompter.ask(f"Attempt connection to {self.host}? (Y/N)")
        if (answer or "").strip().upper() not in _AFFIRMATIVE:
            raise Fatal(code=ExitCode.DECLINED, msg=f"Connection to {self.host} declined by operator")

    def _credentials(self) -> Credentials:
        user = (self.prompter.ask("Username", default=self.user) or "").strip()
        if not user:
            raise Fatal(code=ExitCode.AUTH, msg="No username supplied")
        password = self.prompter.ask_secret(f"Password for {user}@{self.host}")
        if not password:
            raise Fatal(code=ExitCode.AUTH, msg="No password supplied")
        return Credentials(user=user, password=password)

    def _connect(self, credentials: Credentials) -> None:
        Log.step(self.logger, f"Connecting to {self.host} as {credentials.user}")
        try:
            self.session = self.endpoint.connect(self.host, credentials)
        except VMwareError as e:
            raise Fatal(code=classify_exit_code(e), msg=f"Could not connect to {self.host}: {e}", cause=e)

    def _verify_host(self) -> None:
        assert self.session is not None
        if normalize_host(self.session.host) != normalize_host(self.host):
            raise Fatal(
                code=ExitCode.AUTH,
                msg=f"Connected session belongs to {self.session.host!r}, not {self.host!r}",
            ).with_context(requested=self.host, connected=self.session.host)
        Log.ok(self.logger, f"Authenticated to {self.session.host}")

    def _resolve_batch(self) -> None:
        assert self.session is not None
        resolver = GuestBatchResolver(
            self.endpoint,
            self.session,
            self.renderer,
            self.logger,
            strict=self.strict_guests,
        )
        report = resolver.resolve(self.guest_specs)
        self.batch = report.batch
        self.renderer.guest_list(f"Managing {len(self.batch)} guest(s) on {self.host}:", self.batch.names())

    def _disconnect(self) -> None:
        if self.session is not None and self.session.connected:
            self.endpoint.disconnect(self.session)
