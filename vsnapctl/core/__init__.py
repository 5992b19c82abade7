# SPDX-License-Identifier: LGPL-3.0-or-later
# vsnapctl/core/__init__.py
from .exceptions import AuthError, Fatal, NotFoundError, OperationError, VMwareError, VsnapError

__all__ = ["VsnapError", "Fatal", "VMwareError", "AuthError", "NotFoundError", "OperationError"]
