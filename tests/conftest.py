"""
Shared pytest fixtures for cargo-examples tests.

This module provides:
- ``make_project``: builds a throwaway crate layout under ``tmp_path``
- ``cargo_calls``: replaces ``subprocess.run`` and records cargo invocations
- isolation from the caller's ``CARGO*`` environment and structlog config
"""

from __future__ import annotations

import subprocess
import sys
import textwrap
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import pytest
import structlog

# Ensure cargo_examples is importable without installing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch):
    """Drop env vars that would change settings and reset structlog."""
    for var in ("CARGO", "CARGO_EXAMPLES_CARGO", "CARGO_EXAMPLES_LOG_LEVEL", "CARGO_EXAMPLES_LOG_JSON"):
        monkeypatch.delenv(var, raising=False)
    yield
    structlog.reset_defaults()


DEFAULT_MANIFEST = """\
[package]
name = "demo"
version = "0.1.0"
edition = "2021"
"""


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Create ``Cargo.toml`` plus ``examples/`` entries; return the manifest path.

    ``files`` maps paths relative to ``examples/`` to file contents.
    """

    def _make(
        files: dict[str, str] | None = None,
        manifest: str = DEFAULT_MANIFEST,
        with_examples_dir: bool = True,
    ) -> Path:
        manifest_path = tmp_path / "Cargo.toml"
        manifest_path.write_text(textwrap.dedent(manifest), encoding="utf-8")
        if with_examples_dir:
            examples_dir = tmp_path / "examples"
            examples_dir.mkdir(exist_ok=True)
            for rel, content in (files or {}).items():
                path = examples_dir / rel
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding="utf-8")
        return manifest_path

    return _make


@dataclass
class CargoCalls:
    """Recorded ``subprocess.run`` invocations."""

    calls: list[tuple[list[str], Path | None]] = field(default_factory=list)
    returncodes: dict[str, int] = field(default_factory=dict)
    launch_error: OSError | None = None

    @property
    def commands(self) -> list[list[str]]:
        return [cmd for cmd, _ in self.calls]

    def fail(self, example: str, returncode: int) -> None:
        """Make the invocation for ``example`` exit with ``returncode``."""
        self.returncodes[example] = returncode

    def __call__(self, cmd: list[str], *args: Any, cwd: Any = None, **kwargs: Any):
        self.calls.append((list(cmd), Path(cwd) if cwd is not None else None))
        if self.launch_error is not None:
            raise self.launch_error
        code = 0
        for example, rc in self.returncodes.items():
            if "--example" in cmd:
                target = cmd[cmd.index("--example") + 1]
            else:
                target = Path(cmd[cmd.index("--manifest-path") + 1]).parent.name
            if target == example:
                code = rc
        return subprocess.CompletedProcess(cmd, code)


@pytest.fixture
def cargo_calls(monkeypatch: pytest.MonkeyPatch) -> CargoCalls:
    recorder = CargoCalls()
    monkeypatch.setattr("cargo_examples.runner.subprocess.run", recorder)
    return recorder
