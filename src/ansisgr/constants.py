"""Global constants and default paths."""

from __future__ import annotations

import os
from pathlib import Path

# Version
VERSION = "0.1.0"

# Escape introducer
ESC = "\x1b"
SGR_FINAL = "m"
PARAM_SEPARATOR = ";"

# XDG-compliant default paths
CONFIG_DIR = Path(os.environ.get("ANSISGR_CONFIG_DIR", "~/.config/ansisgr")).expanduser()

# Config file names
GLOBAL_CONFIG = CONFIG_DIR / "config.toml"
PROJECT_CONFIG = ".ansisgr/config.toml"

# Render defaults
DEFAULT_CLASS_PREFIX = "ansi-"
DEFAULT_LOG_LEVEL = "warning"

# Characters of context shown around a parse error
ERROR_SNIPPET_WIDTH = 12
