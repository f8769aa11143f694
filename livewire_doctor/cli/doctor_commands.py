import click
from pathlib import Path

from livewire_doctor.config import DEFAULT_NAMESPACE, PUBLISHED_CONFIG_TEMPLATE
from livewire_doctor.services.health_service import run_checks, summarize
from livewire_doctor.types.status_types import CheckStatus

# Plain-text tags keep the report readable on cp1252 consoles.
STATUS_STYLES = {
    CheckStatus.OK: ('[ok]', 'green'),
    CheckStatus.WARN: ('[warn]', 'yellow'),
    CheckStatus.ERROR: ('[error]', 'red'),
}


def init_doctor_commands(app):
    """Register the livewire-doctor Flask CLI commands on the given app."""

    @app.cli.command('livewire-doctor')
    def livewire_doctor():
        """Run a health check for your Livewire installation."""
        click.secho('Running Livewire health check...', fg='cyan')
        with app.app_context():
            results = run_checks(app.config)
        for result in results:
            tag, colour = STATUS_STYLES[result.status]
            click.echo(f"{click.style(tag, fg=colour)} {result.message}")
        counts = summarize(results)
        click.secho(
            f"Health check complete: {counts['ok']} ok, {counts['warn']} warning(s), {counts['error']} error(s).",
            fg='cyan',
        )

    @app.cli.command('livewire-doctor-publish')
    @click.option('--force', is_flag=True, default=False, help='Overwrite an existing override file')
    def livewire_doctor_publish(force):
        """Write the Livewire Doctor override file into the instance folder."""
        target = Path(app.instance_path) / 'livewire_doctor.py'
        if target.exists() and not force:
            click.echo(f'Override file already exists: {target} (use --force to overwrite)')
            return
        target.parent.mkdir(parents=True, exist_ok=True)
        namespace = app.config.get('LIVEWIRE_DOCTOR_NAMESPACE') or DEFAULT_NAMESPACE
        target.write_text(PUBLISHED_CONFIG_TEMPLATE.format(namespace=namespace), encoding='utf-8')
        click.echo(f'Wrote Livewire Doctor config to: {target}')
