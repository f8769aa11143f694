import json
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import structlog

log = structlog.get_logger()


class ServiceError(Exception):
    pass


class MissingManifestError(ServiceError):
    pass


class MissingAssetError(ServiceError):
    pass


@dataclass(frozen=True)
class AssetPaths:
    """Resolved filesystem locations used by the asset sync."""
    lock_file: Path
    package: str
    source_dir: Path
    dest_dir: Path
    marker_file: Path
    asset: str

    @property
    def dest_asset(self) -> Path:
        return self.dest_dir / self.asset

    @property
    def source_asset(self) -> Path:
        return self.source_dir / self.asset


def asset_paths_from_config(config) -> AssetPaths:
    """Build AssetPaths from a Flask config carrying the LIVEWIRE_DOCTOR_* keys."""
    project_root = Path(config["LIVEWIRE_DOCTOR_PROJECT_ROOT"])
    public_path = Path(config["LIVEWIRE_DOCTOR_PUBLIC_PATH"])
    namespace_dir = public_path / "vendor" / config["LIVEWIRE_DOCTOR_NAMESPACE"].strip("/")
    return AssetPaths(
        lock_file=project_root / config["LIVEWIRE_DOCTOR_LOCK_FILE"],
        package=config["LIVEWIRE_DOCTOR_PACKAGE"],
        source_dir=project_root / config["LIVEWIRE_DOCTOR_SOURCE_ASSETS"],
        dest_dir=namespace_dir / "dist",
        marker_file=namespace_dir / config["LIVEWIRE_DOCTOR_MARKER_FILE"],
        asset=config["LIVEWIRE_DOCTOR_ASSET"],
    )


def load_manifest(lock_file: Path) -> dict:
    """
    Parse the dependency lock manifest.
    Raises MissingManifestError if the file is absent or not a JSON object.
    """
    if not lock_file.exists():
        raise MissingManifestError(f"Lock manifest not found at: {lock_file}")
    try:
        data = json.loads(lock_file.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MissingManifestError(f"Lock manifest is not valid JSON: {lock_file} ({e})") from e
    if not isinstance(data, dict):
        raise MissingManifestError(f"Lock manifest is not a JSON object: {lock_file}")
    return data


def read_installed_version(lock_file: Path, package: str) -> Optional[str]:
    """
    Get the installed version of `package` from the lock manifest.

    Returns None if the manifest does not exist or has no record for the
    package.
    """
    try:
        manifest = load_manifest(lock_file)
    except MissingManifestError as e:
        if lock_file.exists():
            log.warning("manifest.invalid", path=str(lock_file), error=str(e))
        return None

    for record in manifest.get("packages") or []:
        if isinstance(record, dict) and record.get("name") == package:
            return record.get("version")
    return None


def read_published_version(marker_file: Path) -> Optional[str]:
    """Get the version recorded by the last sync, or None if there is none."""
    if not marker_file.exists():
        return None
    try:
        data = json.loads(marker_file.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        # Treated as absent so the next sync rewrites it.
        log.warning("marker.unreadable", path=str(marker_file))
        return None
    if not isinstance(data, dict):
        return None
    return data.get("version")


def write_marker(marker_file: Path, version: str) -> None:
    marker_file.parent.mkdir(parents=True, exist_ok=True)
    marker_file.write_text(json.dumps({"version": version}, indent=4) + "\n", encoding="utf-8")


def _require_source(source_dir: Path) -> None:
    if not source_dir.is_dir():
        raise MissingAssetError(f"Source assets directory not found at: {source_dir}")


def sync_if_stale(paths: AssetPaths) -> bool:
    """
    Republish the asset directory when the installed version differs from the
    published one.

    - installed version unknown: nothing to do
    - versions equal: nothing to do, no filesystem writes
    - source directory missing: warning, nothing touched, marker stays stale
    - otherwise: delete and recreate the destination, copy the source tree,
      write the marker

    OSError raised while copying is not handled here.
    Returns True if the assets were published.
    """
    installed = read_installed_version(paths.lock_file, paths.package)
    if not installed:
        log.debug("assets.sync.skipped", reason="not_installed", package=paths.package)
        return False

    published = read_published_version(paths.marker_file)
    if installed == published:
        log.debug("assets.sync.skipped", reason="up_to_date", version=installed)
        return False

    try:
        _require_source(paths.source_dir)
    except MissingAssetError as e:
        log.warning("assets.source_missing", path=str(paths.source_dir), error=str(e))
        return False

    if paths.dest_dir.exists():
        shutil.rmtree(paths.dest_dir)
    paths.dest_dir.mkdir(parents=True, exist_ok=True)
    shutil.copytree(paths.source_dir, paths.dest_dir, dirs_exist_ok=True)

    write_marker(paths.marker_file, installed)
    log.info("assets.published", version=installed, previous=published, dest=str(paths.dest_dir))
    return True


def publish_script(paths: AssetPaths) -> bool:
    """
    Copy only the script asset when it is missing from the destination.
    Leaves the marker alone. Returns True if a file was copied.
    """
    if paths.dest_asset.exists() or not paths.source_asset.exists():
        return False
    paths.dest_asset.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(paths.source_asset, paths.dest_asset)
    log.info("assets.script_restored", dest=str(paths.dest_asset))
    return True
