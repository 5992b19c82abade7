# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/cli/help_texts.py
from __future__ import annotations

# NOTE:
# Pure help text used by the argparse epilog. Keep it copy/paste runnable.

YAML_EXAMPLE = r"""# vsnapctl configuration (YAML)
#
# Run:
#   vsnapctl --config vcenter.yaml web01,web02,db01 vc.example.com
#
# Merge multiple configs (later overrides earlier; CLI flags override both):
#   vsnapctl --config base.yaml --config lab.yaml web01 vc.example.com
#
# Guests and the vCenter host are always given on the command line.
#
# user: administrator@vsphere.local   # default for the username prompt
# port: 443
# insecure: false                     # skip TLS verification (self-signed vCenter)
# timeout: 30                         # connect timeout, seconds
# strict_guests: false                # abort if any guest name does not resolve
#
# Snapshot creation:
# description: "Created by vsnapctl"
# memory: false                       # include guest memory
# quiesce: false                      # quiesce guest filesystems (needs VMware Tools)
"""

CONSOLE_SUMMARY = r"""Interactive commands (case-insensitive):
  LIST ALL      list every snapshot of every guest
  LIST LAST     show the most recent snapshot of each guest
  CREATE        create one snapshot, same name, on every guest
  DELETE LAST   delete each guest's most recent snapshot (asks YES/NO)
  HELP, ?       show commands
  EXIT          disconnect and quit

Exit codes:
  0 ok, 1 unexpected error, 2 usage, 3 connection declined,
  10 authentication/host mismatch, 11 no guest resolved, 12 network,
  13 pyvmomi missing, 30 other vSphere API error, 130 interrupted
"""
