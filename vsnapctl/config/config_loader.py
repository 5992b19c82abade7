# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vsnapctl/config/config_loader.py
"""
YAML configuration: load, merge (later files win), and push onto argparse defaults.
"""
from __future__ import annotations

import argparse
import glob
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from ..core.utils import U
from ..vmware.errors import ExitCode

# Read in phase 0, before any config file is loaded.
_NOT_CONFIGURABLE = frozenset({"config", "dump_config", "dump_args", "verbose", "quiet", "log_file", "json_logs"})


class Config:
    @staticmethod
    def expand_configs(logger: logging.Logger, cfgs: Sequence[str]) -> List[Path]:
        """
        Expand ~ and shell globs; a literal path that matches nothing is kept
        so load_one() can report it as missing.
        """
        out: List[Path] = []
        for raw in cfgs:
            pattern = str(Path(raw).expanduser())
            matches = sorted(glob.glob(pattern))
            if matches:
                out.extend(Path(m) for m in matches)
            else:
                out.append(Path(pattern))
        logger.debug("Config files: %s", [str(p) for p in out])
        return out

    @staticmethod
    def load_one(logger: logging.Logger, path: Path) -> Dict[str, Any]:
        if not path.is_file():
            U.die(logger, f"Config file not found: {path}", ExitCode.USAGE)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            U.die(logger, f"Config file is not valid YAML: {path}: {e}", ExitCode.USAGE)
        if data is None:
            return {}
        if not isinstance(data, dict):
            U.die(logger, f"Config file must contain a mapping at top level: {path}", ExitCode.USAGE)
        return data

    @staticmethod
    def merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        out = dict(base)
        for k, v in override.items():
            if isinstance(v, dict) and isinstance(out.get(k), dict):
                out[k] = Config.merge(out[k], v)
            else:
                out[k] = v
        return out

    @staticmethod
    def load_many(logger: logging.Logger, paths: Sequence[Path]) -> Dict[str, Any]:
        conf: Dict[str, Any] = {}
        for p in paths:
            conf = Config.merge(conf, Config.load_one(logger, p))
            logger.debug("Loaded config: %s", p)
        return conf

    @staticmethod
    def apply_as_defaults(logger: logging.Logger, parser: argparse.ArgumentParser, conf: Dict[str, Any]) -> None:
        """
        Use config values as parser defaults so explicit CLI flags still win.
        Only optional flags are configurable; positionals always come from the CLI.
        """
        actions = {a.dest: a for a in parser._actions if a.option_strings and a.dest != "help"}
        defaults: Dict[str, Any] = {}
        for k, v in conf.items():
            dest = str(k).replace("-", "_")
            if dest in actions and dest not in _NOT_CONFIGURABLE:
                defaults[dest] = Config._coerce(logger, k, actions[dest], v)
            else:
                logger.debug("Ignoring unknown config key: %s", k)
        if defaults:
            parser.set_defaults(**defaults)

    @staticmethod
    def _coerce(logger: logging.Logger, key: Any, action: argparse.Action, value: Any) -> Any:
        """
        Config value -> what the CLI flag would have produced.

        Flags take YAML booleans only; typed options go through the option type;
        the rest become strings. null is allowed where the flag defaults to None.
        """
        if value is None:
            if action.default is None and action.nargs != 0:
                return None
        elif action.nargs == 0:
            if isinstance(value, bool):
                return value
        elif not isinstance(value, (bool, dict, list)):
            try:
                return (action.type or str)(value)
            except (TypeError, ValueError):
                pass
        U.die(logger, f"Config key {key!r}: invalid value {value!r}", ExitCode.USAGE)
