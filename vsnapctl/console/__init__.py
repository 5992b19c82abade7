# SPDX-License-Identifier: LGPL-3.0-or-later
# vsnapctl/console/__init__.py
"""
Interactive snapshot console.

- models: value types (sessions, guests, snapshot records, per-guest results)
- commands: command enumeration and parsing
- gate: YES/NO confirmation gate
- batch: guest list splitting and resolution
- operations: batch snapshot operations
- loop: command loop
- session: top-level session controller
"""

__all__ = []
