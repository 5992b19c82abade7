# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/console/prompts.py
from __future__ import annotations

from typing import Any, Optional

from ..vmware.vmware_utils import create_console


class Prompter:
    """
    Blocking one-line reads from the operator.

    Every read returns None once input is closed (EOF), so callers can map a
    closed stream to a safe answer instead of spinning on it.
    """

    def __init__(self, console: Any = None):
        self.console = console if console is not None else create_console()

    def ask(self, prompt: str, *, default: Optional[str] = None) -> Optional[str]:
        suffix = f" [{default}]" if default else ""
        try:
            line = self.console.input(f"{prompt}{suffix}: ", markup=False)
        except EOFError:
            return None
        if not line.strip() and default:
            return default
        return line

    def ask_secret(self, prompt: str) -> Optional[str]:
        try:
            return self.console.input(f"{prompt}: ", markup=False, password=True)
        except EOFError:
            return None
