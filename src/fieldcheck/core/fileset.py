from pathlib import Path

from .manifest import ProjectManifest


def discover_schema_files(root: Path, manifest: ProjectManifest) -> list[Path]:
    files: list[Path] = []
    for rel in manifest.schemas.paths:
        base = (root / rel).resolve()
        if not base.exists():
            continue
        if base.is_file():
            files.append(base)
            continue
        for p in base.rglob(manifest.schemas.pattern):
            files.append(p)
    return sorted(set(files))
