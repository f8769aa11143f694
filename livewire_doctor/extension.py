from dataclasses import dataclass, field

from flask import current_app, has_request_context, url_for
import structlog

from livewire_doctor.cli.doctor_commands import init_doctor_commands
from livewire_doctor.config import apply_defaults
from livewire_doctor.routes import SCRIPT_ENDPOINT, register_routes
from livewire_doctor.services.path_resolver import RouteResolver, resolver_from_config
from livewire_doctor.services.version_service import (
    AssetPaths,
    asset_paths_from_config,
    publish_script,
    sync_if_stale,
)
from livewire_doctor.types.status_types import ProcessingDirectory, RouteKind

log = structlog.get_logger()

EXTENSION_KEY = 'livewire_doctor'


@dataclass
class DoctorState:
    """Per-app bootstrap result stored in app.extensions."""
    paths: AssetPaths
    resolver: RouteResolver
    routes: dict = field(default_factory=dict)
    published: bool = False

    @property
    def processing_directory(self) -> ProcessingDirectory:
        return self.resolver.mode


class LivewireDoctor:
    """
    Flask extension that keeps the Livewire script asset published and
    registers its script/update routes for the detected deployment layout.

        doctor = LivewireDoctor(update_handler=my_update_view)
        doctor.init_app(app)
    """

    def __init__(self, app=None, script_handler=None, update_handler=None):
        self.script_handler = script_handler
        self.update_handler = update_handler
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        apply_defaults(app)

        paths = asset_paths_from_config(app.config)
        published = False
        if app.config["LIVEWIRE_DOCTOR_SYNC_ON_BOOT"]:
            published = sync_if_stale(paths)
            if not published:
                publish_script(paths)

        # Classified once here and handed to the router; never written to config.
        resolver = resolver_from_config(app.config)
        routes = register_routes(app, resolver, self.script_handler, self.update_handler)

        state = DoctorState(paths=paths, resolver=resolver, routes=routes, published=published)
        app.extensions[EXTENSION_KEY] = state

        @app.context_processor
        def inject_livewire_script_url():
            # url_for picks up the request's script root on every request; renders
            # outside a request (mail, CLI) get the registered route path.
            if has_request_context():
                return {"livewire_script_url": url_for(SCRIPT_ENDPOINT)}
            return {"livewire_script_url": resolver.resolve_path(RouteKind.ASSET)}

        init_doctor_commands(app)

        log.info("livewire_doctor.booted", mode=resolver.mode.value, published=published)
        return state

    @staticmethod
    def state(app=None) -> DoctorState:
        app = app or current_app
        return app.extensions[EXTENSION_KEY]

    def processing_directory(self, app=None) -> ProcessingDirectory:
        return self.state(app).processing_directory
