# SPDX-License-Identifier: LGPL-3.0-or-later
# vsnapctl/cli/__init__.py
