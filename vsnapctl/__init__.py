# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/__init__.py
"""
vsnapctl - interactive vSphere snapshot console

Connects to one vCenter / ESXi endpoint, resolves a comma-separated batch of
guests and then applies snapshot commands (LIST ALL, LIST LAST, CREATE,
DELETE LAST) to every guest in the batch.

Usage as a library:

    from vsnapctl.vmware.clients.client import VMwareClient
    from vsnapctl.console.session import SessionController

    client = VMwareClient(logger, insecure=True)
    rc = SessionController(client, "vcenter.example.com", ["vm1", "vm2"],
                           prompter=prompter, renderer=renderer, logger=logger).run()
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
