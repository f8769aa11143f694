from flask import current_app, jsonify, send_from_directory
import structlog

from livewire_doctor.types.status_types import RouteKind

log = structlog.get_logger()

SCRIPT_ENDPOINT = 'livewire_doctor.script'
UPDATE_ENDPOINT = 'livewire_doctor.update'


def serve_published_script():
    """Serve the published script asset from the public vendor directory."""
    state = current_app.extensions['livewire_doctor']
    paths = state.paths
    return send_from_directory(paths.dest_dir, paths.asset, mimetype='application/javascript')


def missing_update_handler():
    """Fallback for hosts that did not hand over a component update handler."""
    return jsonify({"error": "No Livewire update handler is configured."}), 501


def register_routes(app, resolver, script_handler=None, update_handler=None):
    """
    Register the script (GET) and update (POST) routes at the paths the
    resolver computes. Returns the {kind: path} mapping that was registered.
    """
    script_path = resolver.resolve_path(RouteKind.ASSET)
    update_path = resolver.resolve_path(RouteKind.UPDATE)

    app.add_url_rule(
        script_path,
        endpoint=SCRIPT_ENDPOINT,
        view_func=script_handler or serve_published_script,
        methods=['GET'],
    )
    app.add_url_rule(
        update_path,
        endpoint=UPDATE_ENDPOINT,
        view_func=update_handler or missing_update_handler,
        methods=['POST'],
    )

    log.info("routes.registered", script=script_path, update=update_path, mode=resolver.mode.value)
    return {RouteKind.ASSET: script_path, RouteKind.UPDATE: update_path}
