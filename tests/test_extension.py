import json

from flask import Flask, render_template_string

from livewire_doctor import LivewireDoctor, create_app
from livewire_doctor.services.version_service import read_published_version
from livewire_doctor.types.status_types import ProcessingDirectory, RouteKind


def _namespace_dir(project):
    return project / 'public' / 'vendor' / 'devrabiul' / 'livewire-doctor'


def test_boot_publishes_assets(app, project):
    state = app.extensions['livewire_doctor']

    assert state.published is True
    assert (_namespace_dir(project) / 'dist' / 'livewire.js').exists()
    assert read_published_version(_namespace_dir(project) / 'version.json') == '2.1.0'


def test_second_boot_does_not_republish(project_config, project, tmp_path):
    create_app('testing', instance_path=str(tmp_path / 'instance'), **project_config)
    again = create_app('testing', instance_path=str(tmp_path / 'instance'), **project_config)

    assert again.extensions['livewire_doctor'].published is False


def test_processing_directory_is_exposed(app):
    assert LivewireDoctor.state(app).processing_directory == ProcessingDirectory.PUBLIC
    assert 'LIVEWIRE_DOCTOR_SYSTEM_PROCESSING_DIRECTORY' not in app.config


def test_public_layout_routes(app, client):
    routes = app.extensions['livewire_doctor'].routes
    assert routes[RouteKind.ASSET] == '/vendor/devrabiul/livewire-doctor/dist/livewire.js'
    assert routes[RouteKind.UPDATE] == '/livewire/update'

    resp = client.get('/vendor/devrabiul/livewire-doctor/dist/livewire.js')
    assert resp.status_code == 200
    assert resp.data == b'// livewire 2.1.0'
    resp.close()

    resp = client.post('/livewire/update', json={})
    assert resp.status_code == 501


def test_root_layout_with_base_path(project_config, project, tmp_path):
    project_config['LIVEWIRE_DOCTOR_ENTRY_SCRIPT'] = str(project / 'server.py')
    project_config['LIVEWIRE_DOCTOR_BASE_PATH'] = '/app/'

    app = create_app('testing', instance_path=str(tmp_path / 'instance'), **project_config)

    routes = app.extensions['livewire_doctor'].routes
    assert app.extensions['livewire_doctor'].processing_directory == ProcessingDirectory.ROOT
    assert routes[RouteKind.UPDATE] == '/app/public/livewire/update'
    assert routes[RouteKind.ASSET] == '/app/public/vendor/devrabiul/livewire-doctor/dist/livewire.js'


def test_host_handlers_are_used(project_config, tmp_path):
    def update_view():
        return {"components": []}

    def script_view():
        return 'console.log("host")'

    app = Flask(__name__, instance_path=str(tmp_path / 'instance'))
    app.config.update(project_config)
    LivewireDoctor(app, script_handler=script_view, update_handler=update_view)
    client = app.test_client()

    assert client.post('/livewire/update').get_json() == {"components": []}
    assert client.get('/vendor/devrabiul/livewire-doctor/dist/livewire.js').data == b'console.log("host")'


def test_missing_source_does_not_abort_boot(project_config, project, tmp_path):
    for f in (project / 'vendor' / 'livewire' / 'livewire' / 'dist').iterdir():
        f.unlink()
    (project / 'vendor' / 'livewire' / 'livewire' / 'dist').rmdir()

    app = create_app('testing', instance_path=str(tmp_path / 'instance'), **project_config)

    assert app.extensions['livewire_doctor'].published is False
    assert not (_namespace_dir(project) / 'version.json').exists()


def test_deleted_script_is_restored_on_boot(app, project, project_config, tmp_path):
    script = _namespace_dir(project) / 'dist' / 'livewire.js'
    script.unlink()

    create_app('testing', instance_path=str(tmp_path / 'instance'), **project_config)

    assert script.exists()


def test_script_url_in_templates(app):
    with app.test_request_context('/', base_url='http://localhost/shop'):
        html = render_template_string('{{ livewire_script_url }}')
    assert html == '/shop/vendor/devrabiul/livewire-doctor/dist/livewire.js'


def test_published_override_file_is_loaded(project_config, project, tmp_path):
    instance = tmp_path / 'instance'
    instance.mkdir()
    (instance / 'livewire_doctor.py').write_text('LIVEWIRE_DOCTOR_NAMESPACE = "acme/assets"\n', encoding='utf-8')

    app = create_app('testing', instance_path=str(instance), **project_config)

    assert app.extensions['livewire_doctor'].routes[RouteKind.ASSET] == '/vendor/acme/assets/dist/livewire.js'
    marker = project / 'public' / 'vendor' / 'acme' / 'assets' / 'version.json'
    assert json.loads(marker.read_text(encoding='utf-8')) == {"version": "2.1.0"}


def test_undecodable_lock_file_does_not_abort_boot(project_config, project, tmp_path):
    (project / 'composer.lock').write_bytes(b'\xff\xfe{"packages": []}')

    app = create_app('testing', instance_path=str(tmp_path / 'instance'), **project_config)

    assert app.extensions['livewire_doctor'].published is False
    assert not (_namespace_dir(project) / 'version.json').exists()


def test_templates_render_outside_a_request(app):
    with app.app_context():
        assert render_template_string('hello') == 'hello'
        html = render_template_string('{{ livewire_script_url }}')
    assert html == '/vendor/devrabiul/livewire-doctor/dist/livewire.js'


def test_override_file_can_disable_sync(project_config, project, tmp_path):
    instance = tmp_path / 'instance'
    instance.mkdir()
    (instance / 'livewire_doctor.py').write_text('LIVEWIRE_DOCTOR_SYNC_ON_BOOT = False\n', encoding='utf-8')

    app = create_app('testing', instance_path=str(instance), **project_config)

    assert app.config['LIVEWIRE_DOCTOR_SYNC_ON_BOOT'] is False
    assert not (_namespace_dir(project) / 'dist').exists()
