"""
Cargo manifest handling: ``--manifest-path`` resolution and ``[[example]]``
declarations.

A project looks like::

    <project>/Cargo.toml
    <project>/examples/...

so the examples directory is always the ``examples`` sibling of the
manifest.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cargo_examples.errors import ConfigError, ManifestNotFoundError, ManifestParseError
from cargo_examples.logging import get_logger

logger = get_logger(__name__)

MANIFEST_NAME = "Cargo.toml"
EXAMPLES_DIR_NAME = "examples"


@dataclass(frozen=True, slots=True)
class ProjectLayout:
    """Resolved locations for one run.

    Attributes:
        manifest_path: Absolute path to the project's ``Cargo.toml``.
        root_dir: Directory holding the manifest; ``cargo`` runs from here.
        examples_dir: ``<root_dir>/examples``.
    """

    manifest_path: Path
    root_dir: Path
    examples_dir: Path


@dataclass(slots=True)
class Manifest:
    """The parts of ``Cargo.toml`` the runner cares about."""

    path: Path
    package_name: str | None = None
    example_names: list[str] = field(default_factory=list)

    @classmethod
    def from_path(cls, path: Path) -> Manifest:
        """Load and parse a manifest, raising ``ManifestParseError`` on failure."""
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
            raise ManifestParseError(path, cause=exc) from exc
        return cls.from_dict(path, data)

    @classmethod
    def from_dict(cls, path: Path, data: dict[str, Any]) -> Manifest:
        package = data.get("package")
        package_name = package.get("name") if isinstance(package, dict) else None

        declared = data.get("example", [])
        if not isinstance(declared, list):
            raise ManifestParseError(
                path, cause=ValueError("`example` must be an array of tables")
            )

        names: list[str] = []
        for product in declared:
            name = product.get("name") if isinstance(product, dict) else None
            # nameless [[example]] tables are ignored
            if isinstance(name, str) and name:
                names.append(name)

        return cls(
            path=path,
            package_name=package_name if isinstance(package_name, str) else None,
            example_names=names,
        )


def resolve_layout(manifest_path: Path | str | None = None) -> ProjectLayout:
    """Validate ``--manifest-path`` and derive the project directories.

    Raises:
        ManifestNotFoundError: the path is missing or not a regular file.
        ConfigError: the manifest has no parent directory.
    """
    path = Path(manifest_path) if manifest_path is not None else Path(MANIFEST_NAME)

    if not path.is_file():
        raise ManifestNotFoundError(path)

    path = path.resolve()
    root_dir = path.parent
    if root_dir == path:
        raise ConfigError(
            f"{MANIFEST_NAME} does not have parent directory",
            context={"path": str(path)},
        )

    layout = ProjectLayout(
        manifest_path=path,
        root_dir=root_dir,
        examples_dir=root_dir / EXAMPLES_DIR_NAME,
    )
    logger.debug(
        "manifest.resolved",
        manifest_path=str(layout.manifest_path),
        examples_dir=str(layout.examples_dir),
    )
    return layout


def load_manifest(path: Path) -> Manifest:
    """Parse ``Cargo.toml`` and log what it declares."""
    manifest = Manifest.from_path(path)
    logger.debug(
        "manifest.loaded",
        package=manifest.package_name,
        declared_examples=len(manifest.example_names),
    )
    return manifest


__all__ = [
    "EXAMPLES_DIR_NAME",
    "MANIFEST_NAME",
    "Manifest",
    "ProjectLayout",
    "load_manifest",
    "resolve_layout",
]
