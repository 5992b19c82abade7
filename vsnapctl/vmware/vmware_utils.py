# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
"""
Shared utility functions for VMware operations.
"""
from __future__ import annotations

import sys
from typing import Any, Optional


def is_tty(stream=None) -> bool:
    """
    Check if the specified stream (or stdout by default) is a TTY.

    Args:
        stream: File object to check (defaults to sys.stdout)

    Returns:
        True if stream is a TTY, False otherwise
    """
    try:
        if stream is None:
            stream = sys.stdout
        return stream.isatty()
    except Exception:
        return False


def normalize_host(host: Optional[str]) -> str:
    """
    Canonical form of an endpoint host for identity comparison.

    Lower-cases, drops a trailing dot, an optional ":port" suffix and IPv6
    brackets.

    Examples:
        >>> normalize_host("VC.Example.com.")
        'vc.example.com'
        >>> normalize_host("vc.example.com:443")
        'vc.example.com'
        >>> normalize_host("[fe80::1]:443")
        'fe80::1'
    """
    h = (host or "").strip().lower()
    if h.startswith("["):
        end = h.find("]")
        if end != -1:
            return h[1:end]
    if h.count(":") == 1:
        name, _, port = h.partition(":")
        if port.isdigit():
            h = name
    return h.rstrip(".")


def create_console(file: Any = None) -> Any:
    """Create a Rich Console for operator output (stdout unless file is given)."""
    from rich.console import Console

    return Console(file=file, highlight=False)
