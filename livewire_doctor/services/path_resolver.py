import os
from dataclasses import dataclass

import structlog

from livewire_doctor.types.status_types import ProcessingDirectory, RouteKind

log = structlog.get_logger()

UPDATE_PATH = "livewire/update"


def _canonical(path) -> str:
    return os.path.realpath(os.fspath(path))


def classify_processing_directory(entry_script, public_path, project_root) -> ProcessingDirectory:
    """
    Decide where the entry script runs from.

    All three locations are resolved with symlinks followed before comparing:
    the script's directory matching the web root gives PUBLIC, matching the
    project root gives ROOT, anything else UNKNOWN.
    """
    if not entry_script:
        # interactive interpreter, no script to locate
        return ProcessingDirectory.UNKNOWN
    # The containing directory is canonicalised, not the script itself.
    script_dir = _canonical(os.path.dirname(os.path.abspath(os.fspath(entry_script))))
    if script_dir == _canonical(public_path):
        return ProcessingDirectory.PUBLIC
    if script_dir == _canonical(project_root):
        return ProcessingDirectory.ROOT
    return ProcessingDirectory.UNKNOWN


def normalize_base_segment(base_path) -> str:
    return (base_path or "").strip("/")


def build_route(kind: RouteKind, mode: ProcessingDirectory, base_segment: str,
                namespace: str, asset: str) -> str:
    if kind == RouteKind.ASSET:
        tail = f"vendor/{namespace.strip('/')}/dist/{asset}"
    else:
        tail = UPDATE_PATH

    segments = []
    base_segment = normalize_base_segment(base_segment)
    if base_segment:
        segments.append(base_segment)
    if mode != ProcessingDirectory.PUBLIC:
        segments.append("public")
    segments.append(tail)
    return "/" + "/".join(segments)


@dataclass(frozen=True)
class RouteResolver:
    """Route path strategy for one bootstrap."""
    mode: ProcessingDirectory
    base_segment: str
    namespace: str
    asset: str

    def resolve_path(self, kind: RouteKind) -> str:
        return build_route(kind, self.mode, self.base_segment, self.namespace, self.asset)


def resolver_from_config(config) -> RouteResolver:
    mode = classify_processing_directory(
        config["LIVEWIRE_DOCTOR_ENTRY_SCRIPT"],
        config["LIVEWIRE_DOCTOR_PUBLIC_PATH"],
        config["LIVEWIRE_DOCTOR_PROJECT_ROOT"],
    )
    log.info("processing_directory.classified", mode=mode.value,
             entry_script=str(config["LIVEWIRE_DOCTOR_ENTRY_SCRIPT"]))
    return RouteResolver(
        mode=mode,
        base_segment=normalize_base_segment(config["LIVEWIRE_DOCTOR_BASE_PATH"]),
        namespace=config["LIVEWIRE_DOCTOR_NAMESPACE"],
        asset=config["LIVEWIRE_DOCTOR_ASSET"],
    )
