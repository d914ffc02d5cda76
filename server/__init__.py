"""Server package initialization."""

# Expose primary APIs for convenience
from .config_store import ConfigError, ConfigStore, Ruleset, load_config
from .hooks import dispatch, hook
from .unwrap import UnwrapEvent, on_item_unwrap
from .config import PLUGIN_VERSION, DEFAULT_CONFIG_PATH, UNWRAP_HOOK
