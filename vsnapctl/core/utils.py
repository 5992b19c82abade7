# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/core/utils.py
from __future__ import annotations

import datetime as _dt
import json
import logging
from typing import Any, Optional

from .exceptions import Fatal


class U:
    @staticmethod
    def die(logger: logging.Logger, msg: str, code: int = 1) -> None:
        logger.error(msg)
        raise Fatal(code, msg)

    @staticmethod
    def json_dump(obj: Any) -> str:
        try:
            return json.dumps(obj, indent=2, sort_keys=True, default=str)
        except Exception:
            return repr(obj)

    @staticmethod
    def fmt_ts(ts: Optional[_dt.datetime]) -> str:
        """Render a snapshot timestamp in local time, or '-' when unknown."""
        if ts is None:
            return "-"
        if ts.tzinfo is not None:
            ts = ts.astimezone()
        return ts.strftime("%Y-%m-%d %H:%M:%S")

    @staticmethod
    def banner(logger: logging.Logger, title: str) -> None:
        line = "─" * max(10, len(title) + 2)
        logger.info(line)
        logger.info(f" {title}")
        logger.info(line)
