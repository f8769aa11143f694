import os
from pathlib import Path

DEFAULT_NAMESPACE = "devrabiul/livewire-doctor"

# Template written by `flask livewire-doctor-publish` into the instance folder.
PUBLISHED_CONFIG_TEMPLATE = '''# Livewire Doctor overrides. Loaded before the package defaults.

LIVEWIRE_DOCTOR_NAMESPACE = "{namespace}"
LIVEWIRE_DOCTOR_LOCK_FILE = "composer.lock"
LIVEWIRE_DOCTOR_PACKAGE = "livewire/livewire"
LIVEWIRE_DOCTOR_SOURCE_ASSETS = "vendor/livewire/livewire/dist"
LIVEWIRE_DOCTOR_ASSET = "livewire.js"
# LIVEWIRE_DOCTOR_PUBLIC_PATH = "/srv/app/public"
# LIVEWIRE_DOCTOR_BASE_PATH = ""
'''


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "a-hard-to-guess-string"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    # Externally settable asset namespace; the published files live under
    # <public>/vendor/<namespace>/.
    LIVEWIRE_DOCTOR_NAMESPACE = os.environ.get("LIVEWIRE_DOCTOR_NAMESPACE")
    LIVEWIRE_DOCTOR_PROJECT_ROOT = os.environ.get("LIVEWIRE_DOCTOR_PROJECT_ROOT")
    LIVEWIRE_DOCTOR_PUBLIC_PATH = os.environ.get("LIVEWIRE_DOCTOR_PUBLIC_PATH")
    # Literal path prefix for deployments whose proxy does not strip it.
    LIVEWIRE_DOCTOR_BASE_PATH = os.environ.get("LIVEWIRE_DOCTOR_BASE_PATH")
    # None so the instance override file can switch it off; defaults to True.
    LIVEWIRE_DOCTOR_SYNC_ON_BOOT = None


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True


class ProductionConfig(Config):
    pass


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def _default_entry_script():
    import sys

    main = sys.modules.get("__main__")
    script = getattr(main, "__file__", None)
    return script or (sys.argv[0] if sys.argv else "")


def apply_defaults(app):
    """
    Fill every LIVEWIRE_DOCTOR_* key the host app did not set.

    A published override file in the instance folder wins over the
    package defaults but not over values the app already configured.
    """
    override = Path(app.instance_path) / "livewire_doctor.py"
    if override.exists():
        for key, value in _read_pyfile(app, override).items():
            if app.config.get(key) is None:
                app.config[key] = value

    project_root = app.config.get("LIVEWIRE_DOCTOR_PROJECT_ROOT") or str(Path(app.root_path).parent)
    app.config["LIVEWIRE_DOCTOR_PROJECT_ROOT"] = project_root

    defaults = {
        "LIVEWIRE_DOCTOR_PUBLIC_PATH": str(Path(project_root) / "public"),
        "LIVEWIRE_DOCTOR_ENTRY_SCRIPT": _default_entry_script(),
        "LIVEWIRE_DOCTOR_BASE_PATH": "",
        "LIVEWIRE_DOCTOR_NAMESPACE": DEFAULT_NAMESPACE,
        "LIVEWIRE_DOCTOR_LOCK_FILE": "composer.lock",
        "LIVEWIRE_DOCTOR_PACKAGE": "livewire/livewire",
        "LIVEWIRE_DOCTOR_SOURCE_ASSETS": "vendor/livewire/livewire/dist",
        "LIVEWIRE_DOCTOR_ASSET": "livewire.js",
        "LIVEWIRE_DOCTOR_MARKER_FILE": "version.json",
        "LIVEWIRE_DOCTOR_FRAMEWORK_SYMBOL": "livewire.Livewire",
        "LIVEWIRE_DOCTOR_PUBLISHED_ASSET": "vendor/livewire/livewire.js",
        "LIVEWIRE_DOCTOR_COMPONENTS_PATH": str(Path(app.root_path) / "Livewire"),
        "LIVEWIRE_DOCTOR_COMPONENT_EXTENSION": ".py",
        "LIVEWIRE_DOCTOR_SYNC_ON_BOOT": True,
    }
    for key, value in defaults.items():
        if app.config.get(key) is None:
            app.config[key] = value


def _read_pyfile(app, path: Path) -> dict:
    # Load into a scratch mapping so only LIVEWIRE_DOCTOR_* keys are taken.
    from flask import Config as FlaskConfig

    scratch = FlaskConfig(app.root_path)
    scratch.from_pyfile(str(path))
    return {k: v for k, v in scratch.items() if k.startswith("LIVEWIRE_DOCTOR_")}
