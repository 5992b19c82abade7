# SPDX-License-Identifier: LGPL-3.0-or-later
# vsnapctl/vmware/clients/__init__.py
"""
VMware API client modules.

- client: VMwareClient, the pyVmomi EndpointClient implementation
"""
from .client import VMwareClient

__all__ = ["VMwareClient"]
