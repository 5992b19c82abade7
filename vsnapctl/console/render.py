# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/console/render.py
"""Operator-facing output. Diagnostics go to the logger, not here."""
from __future__ import annotations

from typing import Any, Iterable, Sequence, Tuple

from rich.table import Table
from rich.text import Text

from ..core.utils import U
from ..vmware.vmware_utils import create_console
from .models import GuestResult, SnapshotRecord


class Renderer:
    def __init__(self, console: Any = None):
        self.console = console if console is not None else create_console()

    def _line(self, msg: str, style: str) -> None:
        # Text() keeps guest/snapshot names from being parsed as rich markup.
        self.console.print(Text(msg, style=style))

    def info(self, msg: str) -> None:
        self._line(msg, "")

    def ok(self, msg: str) -> None:
        self._line(msg, "green")

    def warn(self, msg: str) -> None:
        self._line(msg, "yellow")

    def error(self, msg: str) -> None:
        self._line(msg, "bold red")

    def help(self, entries: Sequence[Tuple[str, str]]) -> None:
        table = Table(title="Commands", title_justify="left", show_header=True, header_style="bold cyan")
        table.add_column("Command", style="bold", no_wrap=True)
        table.add_column("Description")
        for token, desc in entries:
            table.add_row(Text(token), Text(desc))
        self.console.print(table)

    def guest_list(self, title: str, names: Iterable[str]) -> None:
        self._line(title, "bold")
        for n in names:
            self._line(f"  - {n}", "")

    def snapshots(self, title: str, records: Sequence[SnapshotRecord]) -> None:
        table = Table(title=title, title_justify="left", header_style="bold cyan")
        table.add_column("Guest", no_wrap=True)
        table.add_column("Snapshot")
        table.add_column("Created", no_wrap=True)
        table.add_column("Description")
        for r in records:
            table.add_row(Text(r.guest.name), Text(r.name), Text(U.fmt_ts(r.created)), Text(r.description))
        self.console.print(table)

    def summary(self, action: str, results: Sequence[GuestResult]) -> None:
        ok = sum(1 for r in results if r.ok)
        skipped = sum(1 for r in results if r.skipped)
        failed = sum(1 for r in results if r.error is not None)
        style = "green" if failed == 0 else "yellow"
        self._line(f"{action}: {ok} succeeded, {skipped} skipped, {failed} failed", style)
