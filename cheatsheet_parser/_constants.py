"""Defaults for cheatsheet output and the reference repository import.

Holds the per-cheatsheet file name template, the index and unified payload
version, the default output locations used by the ``parse-markdown``
commands, the upstream repository URL with its posts directory, and the
heading marker that flags keyboard-shortcut cards.

Examples
--------
>>> from cheatsheet_parser import _constants
>>> _constants.CHEATSHEET_FILE_TEMPLATE.format(id="python")
'python.json'
>>> _constants.INDEX_VERSION
'1.0.0'
"""

from pathlib import Path

CHEATSHEET_FILE_TEMPLATE = "{id}.json"
INDEX_VERSION = "1.0.0"

DEFAULT_OUTPUT_DIR = Path("./public/data/cheatsheets")
DEFAULT_INDEX_OUTPUT = Path("./public/data/cheatsheets-index.json")
DEFAULT_UNIFIED_OUTPUT = Path("unified-cheatsheets.json")
DEFAULT_TEMP_DIR = Path("./temp-repo")

REFERENCE_REPO_URL = "https://github.com/Fechin/reference.git"
REFERENCE_POSTS_DIR = Path("source") / "_posts"

SHORTCUTS_CLASS = "shortcuts"
SHORTCUTS_MARKER = "{.shortcuts}"
