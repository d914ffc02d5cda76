"""Shared unwrap-rewards settings."""

import os
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
CONTENT = ROOT / "content"

# Version stamped into config documents written by this server
PLUGIN_VERSION = "1.0.0"
# Documents older than this are replaced by the default document on load
MIN_COMPATIBLE_VERSION = "1.0.0"

CONFIG_ENV_VAR = "UNWRAP_REWARDS_CONFIG"
DEFAULT_CONFIG_PATH = Path(os.environ.get(CONFIG_ENV_VAR, str(CONTENT / "unwrap_rewards.json")))
# shipped as package data next to this module
SCHEMA_PATH = Path(__file__).resolve().parent / "unwrap_rewards.schema.json"

UNWRAP_HOOK = "OnItemUnwrap"

# Upper bound on draws one preview request may run
MAX_PREVIEW_TRIES = 1000
