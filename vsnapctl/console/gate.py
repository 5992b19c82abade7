# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/console/gate.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

from .models import GuestBatch


class Answer(Enum):
    YES = "YES"
    NO = "NO"
    RETRY = "RETRY"


def normalize_answer(text: Optional[str]) -> Answer:
    """None (closed input) is NO; otherwise only an exact YES/NO counts."""
    if text is None:
        return Answer.NO
    t = text.strip().upper()
    if t == "YES":
        return Answer.YES
    if t == "NO":
        return Answer.NO
    return Answer.RETRY


class ConfirmationGate:
    """Blocking YES/NO checkpoint in front of irreversible batch actions."""

    def __init__(self, prompter: Any, renderer: Any, logger: logging.Logger):
        self.prompter = prompter
        self.renderer = renderer
        self.logger = logger

    def confirm(self, batch: GuestBatch, action: str) -> bool:
        self.renderer.guest_list(f"{action} will run on these guests:", batch.names())
        while True:
            raw = self.prompter.ask("Type YES to proceed or NO to cancel")
            answer = normalize_answer(raw)
            if answer is Answer.YES:
                self.logger.info("Operator confirmed: %s", action)
                return True
            if answer is Answer.NO:
                if raw is None:
                    self.logger.warning("Input closed at confirmation prompt; treating as NO")
                self.logger.info("Operator cancelled: %s", action)
                return False
            self.renderer.warn("Please answer YES or NO.")
