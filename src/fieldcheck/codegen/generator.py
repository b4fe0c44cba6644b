"""
Validator module generation.

Generators write artifacts for a set of validation plans:
- ValidatorModuleGenerator writes one module per schema plus a package
  `__init__.py` re-exporting every struct

Each generator reports what it did through a GeneratorResult.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fieldcheck.core import ir
from fieldcheck.core.errors import GenerationError
from fieldcheck.core.manifest import DEFAULT_HEADER

from .synthesizer import render_module

logger = logging.getLogger(__name__)


@dataclass
class GeneratorResult:
    """
    Result from a generator execution.

    Attributes:
        files_created: List of file paths that were created/modified
        artifacts: Data to share with callers (e.g. struct names per module)
        errors: Any non-fatal errors encountered
        warnings: Any warnings to display to user
    """

    files_created: list[Path] = field(default_factory=list)
    artifacts: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Whether generation succeeded (no errors)."""
        return len(self.errors) == 0

    def add_file(self, path: Path, content: str | None = None) -> None:
        """
        Record a file that was created.

        If content is provided, the file is also written to disk.
        """
        if content is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        self.files_created.append(path)

    def add_artifact(self, key: str, value: Any) -> None:
        self.artifacts[key] = value

    def add_error(self, error: str) -> None:
        self.errors.append(error)

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)


class Generator(ABC):
    """
    Base class for all generators.

    A generator creates artifacts from a list of ValidationPlans.
    """

    def __init__(self, plans: list[ir.ValidationPlan], output_dir: Path):
        """
        Initialize generator.

        Args:
            plans: Bound plans, one per schema module
            output_dir: Root output directory for generated files
        """
        self.plans = plans
        self.output_dir = output_dir

    @abstractmethod
    def generate(self) -> GeneratorResult:
        """
        Generate artifacts.

        Returns:
            GeneratorResult with files created and artifacts
        """
        pass

    def _ensure_dir(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def _write_file(self, path: Path, content: str) -> None:
        """Write content to a file, creating parent directories if needed."""
        self._ensure_dir(path.parent)
        path.write_text(content, encoding="utf-8")


class ValidatorModuleGenerator(Generator):
    """Write `<module>.py` for every plan and an `__init__.py` importing them all."""

    def __init__(
        self,
        plans: list[ir.ValidationPlan],
        output_dir: Path,
        header: str = DEFAULT_HEADER,
    ):
        super().__init__(plans, output_dir)
        self.header = header

    def generate(self) -> GeneratorResult:
        result = GeneratorResult()

        try:
            self._ensure_dir(self.output_dir)
        except OSError as e:
            raise GenerationError(f"Cannot create output directory {self.output_dir}: {e}") from e

        imports = ['"""Generated validators. DO NOT EDIT."""\n']
        exported: dict[str, str] = {}

        for plan in self.plans:
            if not plan.module.isidentifier():
                result.add_error(f"Module name '{plan.module}' is not a valid Python module name")
                continue
            if not plan.structs:
                result.add_warning(f"Module '{plan.module}' declares no structs")

            path = self.output_dir / f"{plan.module}.py"
            self._write_file(path, render_module(plan, self.header))
            result.add_file(path)
            result.add_artifact(plan.module, [s.name for s in plan.structs])
            logger.debug("Wrote %s", path)

            for struct in plan.structs:
                if struct.name in exported:
                    result.add_error(
                        f"Struct '{struct.name}' is declared in both module "
                        f"'{exported[struct.name]}' and module '{plan.module}'; "
                        f"the package __init__.py cannot export both"
                    )
                else:
                    exported[struct.name] = plan.module

            if plan.structs:
                names = ", ".join(s.name for s in plan.structs)
                imports.append(f"from .{plan.module} import {names}")

        init_path = self.output_dir / "__init__.py"
        self._write_file(init_path, "\n".join(imports) + "\n")
        result.add_file(init_path)

        return result
