# SPDX-License-Identifier: LGPL-3.0-or-later
# vsnapctl/vmware/__init__.py
"""
vSphere endpoint integration.

- endpoint: abstract EndpointClient consumed by the console core
- clients.client: pyVmomi-backed VMwareClient
- errors: exit codes and connect-failure classification
"""
from .endpoint import EndpointClient

__all__ = ["EndpointClient"]
