from collections import Counter
from dataclasses import dataclass
from pathlib import Path

import structlog
from werkzeug.utils import import_string, ImportStringError

from livewire_doctor.services.version_service import ServiceError, read_installed_version
from livewire_doctor.types.status_types import CheckStatus

log = structlog.get_logger()


class MissingDependencyError(ServiceError):
    pass


@dataclass(frozen=True)
class CheckResult:
    status: CheckStatus
    message: str


def _require_framework(symbol: str):
    try:
        return import_string(symbol)
    except ImportStringError as e:
        raise MissingDependencyError(f"Framework symbol '{symbol}' cannot be imported") from e


def check_framework_installed(config) -> CheckResult:
    symbol = config["LIVEWIRE_DOCTOR_FRAMEWORK_SYMBOL"]
    package = config["LIVEWIRE_DOCTOR_PACKAGE"]
    try:
        _require_framework(symbol)
    except MissingDependencyError as e:
        log.debug("health.framework_missing", symbol=symbol, error=str(e))
        return CheckResult(
            CheckStatus.ERROR,
            f"Livewire is not installed: {symbol} cannot be imported.",
        )

    lock_file = Path(config["LIVEWIRE_DOCTOR_PROJECT_ROOT"]) / config["LIVEWIRE_DOCTOR_LOCK_FILE"]
    version = read_installed_version(lock_file, package) or "unknown"
    return CheckResult(CheckStatus.OK, f"Livewire is installed. Version: {version}")


def check_assets_published(config) -> CheckResult:
    asset = Path(config["LIVEWIRE_DOCTOR_PUBLIC_PATH"]) / config["LIVEWIRE_DOCTOR_PUBLISHED_ASSET"]
    if not asset.exists():
        return CheckResult(
            CheckStatus.WARN,
            f"Livewire assets not found at: {asset}",
        )
    return CheckResult(CheckStatus.OK, "Livewire assets are published.")


def check_markup_directives(config) -> CheckResult:
    # Layout templates are not parsed; this is a reminder only.
    return CheckResult(
        CheckStatus.OK,
        "Please ensure you have @livewireStyles in <head> and @livewireScripts before </body>.",
    )


def check_component_structure(config) -> CheckResult:
    components_path = Path(config["LIVEWIRE_DOCTOR_COMPONENTS_PATH"])
    extension = "." + config["LIVEWIRE_DOCTOR_COMPONENT_EXTENSION"].lstrip(".")
    if not components_path.is_dir():
        return CheckResult(CheckStatus.WARN, f"No Livewire components found in: {components_path}")

    components = [p.name for p in components_path.rglob("*") if p.is_file() and p.suffix == extension]
    if not components:
        return CheckResult(CheckStatus.WARN, "No Livewire component classes detected (0 found).")
    return CheckResult(CheckStatus.OK, f"Found {len(components)} Livewire components.")


CHECKS = (
    check_framework_installed,
    check_assets_published,
    check_markup_directives,
    check_component_structure,
)


def run_checks(config) -> list[CheckResult]:
    """
    Run every health check against the given config.
    Each check yields exactly one result; none depends on another.
    """
    results = [check(config) for check in CHECKS]
    log.info("health.checked", **summarize(results))
    return results


def summarize(results) -> dict:
    counts = Counter(r.status for r in results)
    return {status.value: counts.get(status, 0) for status in CheckStatus}
