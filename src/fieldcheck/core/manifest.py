import tomllib
from dataclasses import dataclass, field
from pathlib import Path

MANIFEST_NAME = "fieldcheck.toml"

DEFAULT_HEADER = "Generated by fieldcheck from {source}. DO NOT EDIT."


@dataclass
class SchemaConfig:
    """Where schema files live, relative to the manifest."""

    paths: list[str] = field(default_factory=lambda: ["schemas"])
    pattern: str = "*.rules"


@dataclass
class OutputConfig:
    """
    Code generation output.

    Examples in fieldcheck.toml:

        [output]
        dir = "src/accounts/validators"
        header = "Generated from {source}. DO NOT EDIT."
    """

    dir: str = "generated"
    header: str = DEFAULT_HEADER


@dataclass
class ProjectManifest:
    """Project manifest loaded from fieldcheck.toml."""

    name: str
    version: str
    project_root: Path
    schemas: SchemaConfig = field(default_factory=SchemaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @property
    def output_dir(self) -> Path:
        return self.project_root / self.output.dir


def load_manifest(path: Path) -> ProjectManifest:
    data = tomllib.loads(path.read_text(encoding="utf-8"))

    project = data.get("project", {})
    schemas_data = data.get("schemas", {})
    output_data = data.get("output", {})

    schemas = SchemaConfig(
        paths=schemas_data.get("paths", ["schemas"]),
        pattern=schemas_data.get("pattern", "*.rules"),
    )

    output = OutputConfig(
        dir=output_data.get("dir", "generated"),
        header=output_data.get("header", DEFAULT_HEADER),
    )

    return ProjectManifest(
        name=project.get("name", path.parent.name),
        version=project.get("version", "0.1.0"),
        project_root=path.parent,
        schemas=schemas,
        output=output,
    )
