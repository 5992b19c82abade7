# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/core/optional_imports.py
"""
Centralized optional imports.

pyVmomi is importable-or-not at runtime; the session controller checks
PYVMOMI_AVAILABLE before it ever asks the operator to connect.
"""

from __future__ import annotations

# pyVmomi library (VMware vSphere API)
try:
    from pyVim.connect import Disconnect, SmartConnect  # type: ignore
    from pyVmomi import vim  # type: ignore

    PYVMOMI_AVAILABLE = True
except Exception:
    SmartConnect = None  # type: ignore
    Disconnect = None  # type: ignore
    vim = None  # type: ignore
    PYVMOMI_AVAILABLE = False
