# SPDX-License-Identifier: LGPL-3.0-or-later
# vsnapctl/core/logger.py
"""
Diagnostics logging for vsnapctl.

Operator output (tables, prompts, notices) is rendered by console.render on
stdout; everything here goes to stderr and, optionally, a log file.
"""
from __future__ import annotations

import datetime as _dt
import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..vmware.vmware_utils import is_tty

# Optional: colors
try:
    from termcolor import colored as _colored  # type: ignore
except Exception:  # pragma: no cover
    _colored = None

# ---------------------------------------------------------------------------
# TRACE level (below DEBUG, enabled by -vvv)
# ---------------------------------------------------------------------------

TRACE = 5
if logging.getLevelName(TRACE) != "TRACE":
    logging.addLevelName(TRACE, "TRACE")


def _trace(self: logging.Logger, msg: str, *args, **kwargs) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, msg, args, **kwargs)


if not hasattr(logging.Logger, "trace"):
    logging.Logger.trace = _trace  # type: ignore[attr-defined]

LOGGER_NAME = "vsnapctl"

# levelname -> (emoji, color)
_LEVELS: Dict[str, Tuple[str, str]] = {
    "TRACE": ("🧬", "cyan"),
    "DEBUG": ("🔍", "blue"),
    "INFO": ("✅", "green"),
    "WARNING": ("⚠️", "yellow"),
    "ERROR": ("💥", "red"),
    "CRITICAL": ("🧨", "red"),
}


def _stderr_takes_emoji() -> bool:
    enc = getattr(sys.stderr, "encoding", None) or "utf-8"
    try:
        "💥".encode(enc)
    except (LookupError, UnicodeEncodeError):
        return False
    return True


def c(
    text: str,
    color: Optional[str] = None,
    attrs: Optional[List[str]] = None,
    *,
    enable: bool = True,
) -> str:
    """termcolor wrapper; returns text unchanged when colors are off or unavailable."""
    if not (enable and color) or _colored is None:
        return text
    return _colored(text, color=color, attrs=attrs or [])


# ---------------------------------------------------------------------------
# Per-guest context
# ---------------------------------------------------------------------------

Ctx = Mapping[str, Any]


def _clip(v: Any, limit: int = 240) -> str:
    s = str(v).replace("\r", "\\r").replace("\n", "\\n")
    return s if len(s) <= limit else s[: limit - 1] + "…"


def _ctx_suffix(ctx: Optional[Ctx]) -> str:
    if not ctx:
        return ""
    return " " + " ".join(f"{k}={_clip(ctx[k])}" for k in sorted(ctx, key=str))


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    Carries key=value context (guest, op, ...) onto every record as record.ctx.

      log = Log.bind(logger, guest="web01")
      log.info("Creating snapshot")
      log.error("Failed", extra={"ctx": {"snapshot": "pre-patch"}})
    """

    def __init__(self, logger: logging.Logger, ctx: Optional[Ctx] = None):
        super().__init__(logger, {"ctx": dict(ctx or {})})

    def process(self, msg: Any, kwargs: Dict[str, Any]) -> Tuple[Any, Dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["ctx"] = {**self.extra["ctx"], **(extra.get("ctx") or {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **ctx: Any) -> "ContextLoggerAdapter":
        return ContextLoggerAdapter(self.logger, {**self.extra["ctx"], **ctx})


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LogStyle:
    color: bool = True
    show_ms: bool = False
    show_src: bool = False  # module:line
    show_pid: bool = False
    show_logger: bool = False
    utc: bool = False
    emoji: bool = True


class EmojiFormatter(logging.Formatter):
    """`HH:MM:SS 💥 ERROR    [pid=.. module:line] message key=value`"""

    def __init__(self, style: LogStyle):
        super().__init__()
        self.style = style

    def _clock(self, created: float) -> str:
        tz = _dt.timezone.utc if self.style.utc else None
        ts = _dt.datetime.fromtimestamp(created, tz=tz)
        return ts.strftime("%H:%M:%S.%f")[:-3] if self.style.show_ms else ts.strftime("%H:%M:%S")

    def _where(self, record: logging.LogRecord) -> str:
        bits = []
        if self.style.show_pid:
            bits.append(f"pid={record.process}")
        if self.style.show_logger:
            bits.append(record.name)
        if self.style.show_src:
            bits.append(f"{record.module}:{record.lineno}")
        return f" [{' '.join(bits)}]" if bits else ""

    def format(self, record: logging.LogRecord) -> str:
        emoji, color = _LEVELS.get(record.levelname, ("•", "white"))
        if not self.style.emoji:
            emoji = "·"
        colorize = self.style.color and is_tty(sys.stderr)

        level = c(f"{record.levelname:<8}", color, enable=colorize)
        msg = record.getMessage()
        if record.levelno >= logging.WARNING:
            msg = c(msg, color, ["bold"], enable=colorize)

        line = f"{self._clock(record.created)} {emoji} {level}{self._where(record)} {msg}"
        line += _ctx_suffix(getattr(record, "ctx", None))

        if record.exc_info:
            tb = "\n".join("  " + ln for ln in self.formatException(record.exc_info).splitlines())
            line += "\n" + c(tb, "red", enable=colorize)
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, msg, pid, src, ctx, exc."""

    def __init__(self, *, utc: bool = True):
        super().__init__()
        self.utc = utc

    def format(self, record: logging.LogRecord) -> str:
        tz = _dt.timezone.utc if self.utc else None
        obj: Dict[str, Any] = {
            "ts": _dt.datetime.fromtimestamp(record.created, tz=tz).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "pid": record.process,
            "src": f"{record.module}:{record.lineno}",
        }
        ctx = getattr(record, "ctx", None)
        if ctx:
            obj["ctx"] = {str(k): _clip(v) for k, v in ctx.items()}
        if record.exc_info:
            obj["exc"] = self.formatException(record.exc_info)
        return json.dumps(obj, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class Log:
    @staticmethod
    def _level_from_flags(verbose: int, quiet: int) -> int:
        """
        default / -v: INFO, -vv: DEBUG, -vvv: TRACE
        -q: WARNING, -qq: ERROR (quiet wins)
        """
        if quiet:
            return logging.ERROR if quiet >= 2 else logging.WARNING
        if verbose >= 3:
            return TRACE
        return logging.DEBUG if verbose == 2 else logging.INFO

    @staticmethod
    def bind(logger: Any, **ctx: Any) -> ContextLoggerAdapter:
        if isinstance(logger, ContextLoggerAdapter):
            return logger.bind(**ctx)
        return ContextLoggerAdapter(logger, ctx)

    @staticmethod
    def step(logger: Any, msg: str, **ctx: Any) -> None:
        logger.info("➡️  %s", msg, extra={"ctx": ctx} if ctx else None)

    @staticmethod
    def ok(logger: Any, msg: str, **ctx: Any) -> None:
        logger.info("✔ %s", msg, extra={"ctx": ctx} if ctx else None)

    @staticmethod
    def warn(logger: Any, msg: str, **ctx: Any) -> None:
        logger.warning("%s", msg, extra={"ctx": ctx} if ctx else None)

    @staticmethod
    def fail(logger: Any, msg: str, **ctx: Any) -> None:
        logger.error("%s", msg, extra={"ctx": ctx} if ctx else None)

    @staticmethod
    def setup(
        verbose: int = 0,
        log_file: Optional[str] = None,
        *,
        quiet: int = 0,
        color: bool = True,
        utc: bool = False,
        json_logs: bool = False,
        logger_name: str = LOGGER_NAME,
    ) -> logging.Logger:
        """
        (Re)configure the named logger: a stderr handler plus an optional file
        handler. The file always gets the detailed, uncolored line format.
        """
        logger = logging.getLogger(logger_name)
        logger.propagate = False
        level = Log._level_from_flags(verbose, quiet)
        logger.setLevel(level)

        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()

        emoji = _stderr_takes_emoji()

        def _fmt(console: bool) -> logging.Formatter:
            if json_logs:
                return JsonFormatter(utc=utc)
            if console:
                return EmojiFormatter(
                    LogStyle(color=color, show_ms=verbose >= 3, show_src=verbose >= 3,
                             show_pid=verbose >= 2, utc=utc, emoji=emoji)
                )
            return EmojiFormatter(
                LogStyle(color=False, show_ms=True, show_src=True, show_pid=True,
                         show_logger=True, utc=utc, emoji=emoji)
            )

        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(_fmt(console=True))
        logger.addHandler(sh)

        if log_file:
            fp = Path(log_file).expanduser().resolve()
            fp.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(fp, encoding="utf-8")
            fh.setFormatter(_fmt(console=False))
            logger.addHandler(fh)

        logger.debug("Logging ready (level=%s, pid=%s)", logging.getLevelName(level), os.getpid())
        logger.trace("TRACE enabled")  # type: ignore[attr-defined]
        return logger
