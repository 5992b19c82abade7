# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/console/loop.py
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

from .commands import COMMAND_HELP, Command, ParsedCommand, parse_command
from .gate import ConfirmationGate
from .models import GuestResult, SnapshotRecord
from .operations import SnapshotOperations

PROMPT = "vsnapctl"


class CommandLoop:
    """
    Single state "awaiting command": read, parse, dispatch, repeat until EXIT.
    """

    def __init__(
        self,
        operations: SnapshotOperations,
        gate: ConfirmationGate,
        prompter: Any,
        renderer: Any,
        logger: logging.Logger,
    ):
        self.ops = operations
        self.gate = gate
        self.prompter = prompter
        self.renderer = renderer
        self.logger = logger
        self._handlers: Dict[Command, Callable[[ParsedCommand], None]] = {
            Command.LIST_ALL: self._list_all,
            Command.LIST_LAST: self._list_last,
            Command.CREATE: self._create,
            Command.DELETE_LAST: self._delete_last,
            Command.HELP: self._help,
            Command.UNKNOWN: self._unknown,
        }

    def run(self) -> None:
        self.renderer.help(COMMAND_HELP)
        while True:
            raw = self.prompter.ask(PROMPT)
            if raw is None:
                self.logger.warning("Input closed; leaving command loop")
                return
            parsed = parse_command(raw)
            self.logger.debug("Command %s (raw=%r)", parsed.command.name, parsed.raw)
            if parsed.command is Command.EXIT:
                return
            self._handlers[parsed.command](parsed)

    # ---- handlers ----

    def _help(self, _cmd: ParsedCommand) -> None:
        self.renderer.help(COMMAND_HELP)

    def _unknown(self, cmd: ParsedCommand) -> None:
        self.renderer.error(f"Invalid option: {cmd.raw.strip()!r}")
        self.renderer.help(COMMAND_HELP)

    def _report_errors(self, result: GuestResult) -> bool:
        if result.error is not None:
            self.renderer.error(f"{result.guest.name}: {result.error}")
            return True
        if result.skipped:
            self.renderer.warn(f"{result.guest.name}: {result.note}")
            return True
        return False

    def _list_all(self, _cmd: ParsedCommand) -> None:
        results: List[GuestResult] = []
        for result in self.ops.list_all():
            results.append(result)
            if self._report_errors(result):
                continue
            records = result.value or []
            if records:
                self.renderer.snapshots(f"Snapshots of {result.guest.name}", records)
            else:
                self.renderer.info(f"{result.guest.name}: no snapshots")
        self.renderer.summary("LIST ALL", results)

    def _list_last(self, _cmd: ParsedCommand) -> None:
        results: List[GuestResult] = []
        latest: List[SnapshotRecord] = []
        for result in self.ops.list_last():
            results.append(result)
            if not self._report_errors(result):
                latest.append(result.value)
        if latest:
            self.renderer.snapshots("Most recent snapshots", latest)
        self.renderer.summary("LIST LAST", results)

    def _create(self, _cmd: ParsedCommand) -> None:
        name = self.prompter.ask("Snapshot name")
        name = (name or "").strip()
        if not name:
            self.renderer.warn("No snapshot name given; CREATE cancelled.")
            return
        results: List[GuestResult] = []
        for result in self.ops.create(name):
            results.append(result)
            if not self._report_errors(result):
                self.renderer.ok(f"{result.guest.name}: snapshot {name!r} created")
        self.renderer.summary("CREATE", results)

    def _delete_last(self, _cmd: ParsedCommand) -> None:
        if not self.gate.confirm(self.ops.batch, "DELETE LAST"):
            self.renderer.info("DELETE LAST cancelled; nothing was deleted.")
            return
        results: List[GuestResult] = []
        for result in self.ops.delete_last():
            results.append(result)
            if not self._report_errors(result):
                self.renderer.ok(f"{result.guest.name}: snapshot {result.value.name!r} deleted")
        self.renderer.summary("DELETE LAST", results)
