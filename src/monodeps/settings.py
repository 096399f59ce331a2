from __future__ import annotations
import os

RUSH_JSON = os.environ.get("MONODEPS_RUSH_JSON") or None
INDENT = os.environ.get("MONODEPS_INDENT", "2")  # parsed by the CLI
CONFIG_FILENAME = "rush.json"
MANIFEST_FILENAME = "package.json"
