# app/__init__.py
import os
import logging
from flask import Flask

from server.config import CONFIG_ENV_VAR
from server.config_store import ConfigStore

from .api_rewards import bp as rewards_api_bp


def create_app(config_path=None):
    app = Flask(__name__)

    app.config.update(
        UNWRAP_REWARDS_CONFIG=config_path or os.environ.get(CONFIG_ENV_VAR),
    )

    # Helpful startup log
    app.logger.setLevel(logging.INFO)
    store = ConfigStore(app.config["UNWRAP_REWARDS_CONFIG"])
    app.extensions["unwrap_rewards"] = store
    ruleset = store.load()
    app.logger.info("Unwrap rewards: %s (version %s)", store.path, ruleset.version)

    app.register_blueprint(rewards_api_bp)
    return app
