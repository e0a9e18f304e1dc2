"""
Example discovery.

Examples can be:

- ``<project>/examples/example_foo.rs``
  run as ``cargo run --example example_foo``
- ``<project>/examples/example_bar/main.rs``
  run as ``cargo run --example example_bar``
- ``<project>/examples/example_baz/Cargo.toml``
  not an example as far as cargo is concerned, but a lot of projects keep
  bigger examples as separate crates; run as
  ``cargo run --manifest-path examples/example_baz/Cargo.toml``
- any ``[[example]]`` declared in the project's ``Cargo.toml``, which may
  live at an arbitrary path

The result is a single list sorted by name, so output and execution order
is deterministic when using ``--from``.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar, Union

from cargo_examples.errors import DiscoveryError
from cargo_examples.logging import get_logger
from cargo_examples.manifest import load_manifest

logger = get_logger(__name__)

SOURCE_EXTENSION = ".rs"
ENTRY_POINT = "main.rs"
SUBPROJECT_MANIFEST = "Cargo.toml"
# a directory listing that keeps failing is abandoned after this many errors in a row
MAX_CONSECUTIVE_READ_ERRORS = 16


class ExampleKind(str, Enum):
    FILE = "file"
    MULTI_FILE = "multi_file"
    SUB_PROJECT = "sub_project"
    DECLARED = "declared"


@dataclass(frozen=True, slots=True)
class FileExample:
    """``examples/<name>.rs``"""

    kind: ClassVar[ExampleKind] = ExampleKind.FILE
    path: Path

    @property
    def name(self) -> str | None:
        return self.path.stem or None


@dataclass(frozen=True, slots=True)
class MultiFileExample:
    """``examples/<name>/main.rs``; ``main_path`` points at ``main.rs``."""

    kind: ClassVar[ExampleKind] = ExampleKind.MULTI_FILE
    main_path: Path

    @property
    def name(self) -> str | None:
        return self.main_path.parent.name or None


@dataclass(frozen=True, slots=True)
class SubProjectExample:
    """``examples/<name>/Cargo.toml``; ``manifest_path`` points at that manifest."""

    kind: ClassVar[ExampleKind] = ExampleKind.SUB_PROJECT
    manifest_path: Path

    @property
    def name(self) -> str | None:
        return self.manifest_path.parent.name or None


@dataclass(frozen=True, slots=True)
class DeclaredExample:
    """An ``[[example]]`` table of the project manifest."""

    kind: ClassVar[ExampleKind] = ExampleKind.DECLARED
    declared_name: str

    @property
    def name(self) -> str | None:
        return self.declared_name or None


Example = Union[FileExample, MultiFileExample, SubProjectExample, DeclaredExample]


def classify_entry(path: Path) -> Example | None:
    """Map one directory entry to an example shape, or ``None`` if it is not one.

    Raises ``OSError`` if the entry cannot be inspected.
    """
    if path.is_file():
        if path.suffix == SOURCE_EXTENSION:
            return FileExample(path)
        return None

    if path.is_dir():
        main_path = path / ENTRY_POINT
        if main_path.is_file():
            return MultiFileExample(main_path)

        manifest_path = path / SUBPROJECT_MANIFEST
        if manifest_path.is_file():
            return SubProjectExample(manifest_path)

    return None


def scan_examples_dir(examples_dir: Path) -> Iterator[Example]:
    """Yield the examples found directly inside ``examples_dir``, unsorted.

    Entries that fail to be read or inspected are skipped; a directory that
    cannot be opened at all raises ``DiscoveryError``.
    """
    try:
        entries = os.scandir(examples_dir)
    except OSError as exc:
        raise DiscoveryError(
            f"cannot read examples directory {examples_dir}: {exc.strerror or exc}",
            cause=exc,
        ).with_context(path=str(examples_dir)) from exc

    with entries:
        read_errors = 0
        while True:
            try:
                entry = next(entries)
            except StopIteration:
                break
            except OSError as exc:
                read_errors += 1
                logger.debug("discovery.entry_skipped", path=str(examples_dir), error=str(exc))
                if read_errors >= MAX_CONSECUTIVE_READ_ERRORS:
                    break
                continue
            read_errors = 0

            path = Path(entry.path)
            try:
                example = classify_entry(path)
            except OSError as exc:
                logger.debug("discovery.entry_skipped", path=str(path), error=str(exc))
                continue
            if example is not None:
                yield example


def sort_examples(examples: Iterable[Example]) -> list[Example]:
    """Drop nameless examples and sort the rest by name (stable)."""
    named = [example for example in examples if example.name is not None]
    return sorted(named, key=lambda example: example.name)


def discover_examples(
    examples_dir: Path,
    manifest_path: Path | None = None,
) -> list[Example]:
    """Scan ``examples_dir``, add the manifest's ``[[example]]`` declarations,
    and sort everything by name.

    The directory is scanned before the manifest is parsed; either failing
    aborts discovery.
    """
    found = list(scan_examples_dir(examples_dir))

    declared: list[Example] = []
    if manifest_path is not None:
        manifest = load_manifest(manifest_path)
        declared = [DeclaredExample(name) for name in manifest.example_names]

    examples = sort_examples([*found, *declared])
    logger.debug(
        "discovery.complete",
        path=str(examples_dir),
        scanned=len(found),
        declared=len(declared),
        total=len(examples),
    )
    return examples


__all__ = [
    "DeclaredExample",
    "Example",
    "ExampleKind",
    "FileExample",
    "MultiFileExample",
    "SubProjectExample",
    "classify_entry",
    "discover_examples",
    "scan_examples_dir",
    "sort_examples",
]
