# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/cli/args/groups.py
from __future__ import annotations

import argparse


def _add_global_config_logging(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # Global config/logging (two-phase parse relies on these)
    # ------------------------------------------------------------------
    from ... import __version__

    p.add_argument(
        "--config",
        action="append",
        default=[],
        help="YAML config file (repeatable; later overrides earlier).",
    )
    p.add_argument("--dump-config", action="store_true", help="Print merged config and exit.")
    p.add_argument("--dump-args", action="store_true", help="Print final parsed args and exit.")
    p.add_argument("--version", action="version", version=__version__)
    p.add_argument("-v", "--verbose", action="count", default=0, help="Verbosity: -vv debug, -vvv trace")
    p.add_argument("-q", "--quiet", action="count", default=0, help="Only warnings (-q) or errors (-qq).")
    p.add_argument("--log-file", dest="log_file", default=None, help="Also write logs to file.")
    p.add_argument("--json-logs", dest="json_logs", action="store_true", help="Emit logs as NDJSON.")


def _add_targets(p: argparse.ArgumentParser) -> None:
    p.add_argument("guests", help="Comma-separated guest (VM) names, e.g. web01,web02")
    p.add_argument("vcenter", help="vCenter / ESXi hostname")


def _add_vsphere_core_knobs(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("vSphere connection")
    g.add_argument("--user", dest="user", default=None, help="Default for the username prompt.")
    g.add_argument("--port", dest="port", type=int, default=443, help="vSphere API port.")
    g.add_argument(
        "--insecure",
        dest="insecure",
        action="store_true",
        help="Skip TLS certificate verification (self-signed endpoints only).",
    )
    g.add_argument("--timeout", dest="timeout", type=float, default=None, help="Connect timeout in seconds.")
    g.add_argument(
        "--strict-guests",
        dest="strict_guests",
        action="store_true",
        help="Abort if any guest name fails to resolve (default: continue with the rest).",
    )


def _add_snapshot_knobs(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("Snapshot creation")
    g.add_argument(
        "--description",
        dest="description",
        default="Created by vsnapctl",
        help="Description attached to snapshots made by CREATE.",
    )
    g.add_argument("--memory", dest="memory", action="store_true", help="Include guest memory in new snapshots.")
    g.add_argument("--quiesce", dest="quiesce", action="store_true", help="Quiesce guest filesystems (needs VMware Tools).")
