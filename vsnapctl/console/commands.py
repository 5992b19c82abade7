# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/console/commands.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Command(Enum):
    LIST_ALL = "LIST ALL"
    LIST_LAST = "LIST LAST"
    CREATE = "CREATE"
    DELETE_LAST = "DELETE LAST"
    HELP = "HELP"
    EXIT = "EXIT"
    UNKNOWN = "UNKNOWN"


_TOKENS: Dict[str, Command] = {
    "LIST ALL": Command.LIST_ALL,
    "LIST LAST": Command.LIST_LAST,
    "CREATE": Command.CREATE,
    "DELETE LAST": Command.DELETE_LAST,
    "HELP": Command.HELP,
    "?": Command.HELP,
    "EXIT": Command.EXIT,
}

# (tokens, description) in the order help shows them
COMMAND_HELP: Tuple[Tuple[str, str], ...] = (
    ("LIST ALL", "List every snapshot of every guest in the batch"),
    ("LIST LAST", "Show the most recent snapshot of each guest"),
    ("CREATE", "Create one snapshot, with a single shared name, on every guest"),
    ("DELETE LAST", "Delete the most recent snapshot of each guest (asks for confirmation)"),
    ("HELP, ?", "Show this list"),
    ("EXIT", "Disconnect and quit"),
)


@dataclass(frozen=True)
class ParsedCommand:
    command: Command
    raw: str = ""


def normalize_token(raw: str) -> str:
    return " ".join((raw or "").split()).upper()


def parse_command(raw: str) -> ParsedCommand:
    """
    Map one line of operator input to a command.

    Matching is exact after trimming, collapsing inner whitespace and
    upper-casing; anything else is UNKNOWN and keeps the raw text.
    """
    return ParsedCommand(_TOKENS.get(normalize_token(raw), Command.UNKNOWN), raw or "")
