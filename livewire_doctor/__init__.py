from flask import Flask
from .config import config
from .extension import LivewireDoctor
from .logging_config import configure_logging
import os

__version__ = "1.0.0"

livewire_doctor = LivewireDoctor()


def create_app(config_name=None, instance_path=None, **overrides):
    """
    Application factory function.

    `overrides` are applied on top of the named config before the extension
    boots, which is how tests point it at a temporary project tree.
    """
    if config_name is None:
        config_name = os.getenv('FLASK_CONFIG', 'default')

    app = Flask(__name__, instance_path=instance_path)
    app.config.from_object(config[config_name])
    app.config.update(overrides)

    configure_logging(
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        is_debug=app.config.get("DEBUG", False)
    )

    livewire_doctor.init_app(app)

    return app


__all__ = ['LivewireDoctor', 'create_app', 'livewire_doctor']
