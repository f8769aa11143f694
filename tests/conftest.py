import json
import sys
import types

import pytest
from livewire_doctor import create_app


def write_lock(project_root, version, package='livewire/livewire'):
    lock = {"packages": [
        {"name": "laravel/framework", "version": "v11.0.0"},
        {"name": package, "version": version},
    ]}
    (project_root / 'composer.lock').write_text(json.dumps(lock), encoding='utf-8')


@pytest.fixture
def project(tmp_path):
    """
    A throwaway project tree:

        project/
          composer.lock              (livewire/livewire 2.1.0)
          vendor/livewire/livewire/dist/{livewire.js, livewire.min.js}
          public/index.py
          app/Livewire/
    """
    root = tmp_path / 'project'
    dist = root / 'vendor' / 'livewire' / 'livewire' / 'dist'
    dist.mkdir(parents=True)
    (dist / 'livewire.js').write_text('// livewire 2.1.0', encoding='utf-8')
    (dist / 'livewire.min.js').write_text('//min', encoding='utf-8')
    public = root / 'public'
    public.mkdir()
    (public / 'index.py').write_text('', encoding='utf-8')
    (root / 'app' / 'Livewire').mkdir(parents=True)
    write_lock(root, '2.1.0')
    return root


@pytest.fixture
def project_config(project, tmp_path):
    return {
        'LIVEWIRE_DOCTOR_PROJECT_ROOT': str(project),
        'LIVEWIRE_DOCTOR_PUBLIC_PATH': str(project / 'public'),
        'LIVEWIRE_DOCTOR_ENTRY_SCRIPT': str(project / 'public' / 'index.py'),
        'LIVEWIRE_DOCTOR_COMPONENTS_PATH': str(project / 'app' / 'Livewire'),
    }


@pytest.fixture(scope='function')
def app(project_config, tmp_path):
    """A test app booted against the temporary project tree."""
    app = create_app('testing', instance_path=str(tmp_path / 'instance'), **project_config)
    yield app


@pytest.fixture(scope='function')
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture(scope='function')
def runner(app):
    """A CLI runner for the app."""
    return app.test_cli_runner()


@pytest.fixture
def fake_livewire(monkeypatch):
    """Make `livewire.Livewire` importable."""
    module = types.ModuleType('livewire')
    module.Livewire = type('Livewire', (), {})
    monkeypatch.setitem(sys.modules, 'livewire', module)
    return module


@pytest.fixture
def set_installed(project):
    """Rewrite the lock manifest with a new installed version."""
    def _set(version):
        write_lock(project, version)
    return _set
