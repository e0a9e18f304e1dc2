"""
Running examples through ``cargo run``.

Each example becomes one blocking ``cargo`` subprocess started from the
project root. The child inherits the terminal, so its output streams
straight through. The first failure aborts the whole run.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from cargo_examples.discovery import Example, SubProjectExample
from cargo_examples.errors import ExecutionError
from cargo_examples.logging import get_logger

logger = get_logger(__name__)


def features_flag(features: Sequence[str]) -> list[str]:
    """``["a", "b"]`` -> ``["--features=a,b"]``; nothing when no features are given."""
    if not features:
        return []
    return [f"--features={','.join(features)}"]


@dataclass
class ExampleRunner:
    """Builds and executes the ``cargo run`` command for each example.

    Attributes:
        manifest_path: The project's ``Cargo.toml`` (absolute).
        root_dir: Working directory for every ``cargo`` invocation.
        cargo: cargo executable.
        features: Feature names forwarded as a single ``--features=`` flag.
        cargo_args: Trailing arguments appended verbatim.
    """

    manifest_path: Path
    root_dir: Path
    cargo: str = "cargo"
    features: list[str] = field(default_factory=list)
    cargo_args: list[str] = field(default_factory=list)

    def build_command(self, example: Example) -> list[str]:
        """Return the argv used to run ``example``."""
        name = example.name
        if name is None:
            raise ValueError(f"example has no name: {example!r}")

        if isinstance(example, SubProjectExample):
            # the sub-project's own manifest designates the binary to run
            cmd = [self.cargo, "run", "--manifest-path", str(example.manifest_path)]
        else:
            cmd = [
                self.cargo,
                "run",
                "--manifest-path",
                str(self.manifest_path),
                "--example",
                name,
            ]

        return [*cmd, *features_flag(self.features), *self.cargo_args]

    def run(self, example: Example) -> None:
        """Run one example, raising ``ExecutionError`` unless cargo exits 0."""
        name = example.name or ""
        cmd = self.build_command(example)
        logger.info("runner.exec", example=name, kind=example.kind.value, command=" ".join(cmd))

        try:
            result = subprocess.run(cmd, cwd=self.root_dir, check=False)
        except OSError as exc:
            raise ExecutionError(
                f"failed to launch `{self.cargo}` for example {name}: {exc}",
                example=name,
                command=cmd,
                cause=exc,
            ) from exc

        if result.returncode != 0:
            raise ExecutionError(
                f"example {name} failed: `{' '.join(cmd)}` exited with status {result.returncode}",
                example=name,
                returncode=result.returncode,
                command=cmd,
            )

        logger.debug("runner.done", example=name)

    def run_all(
        self,
        examples: Iterable[Example],
        *,
        print_names: bool = False,
        no_run: bool = False,
        echo: Callable[[str], None] = print,
    ) -> int:
        """Walk already-selected examples in order; return how many were run.

        ``print_names`` echoes each name first; ``no_run`` stops short of
        invoking cargo.
        """
        ran = 0
        for example in examples:
            if print_names:
                echo(example.name or "")

            if no_run:
                continue

            self.run(example)
            ran += 1
        return ran


__all__ = [
    "ExampleRunner",
    "features_flag",
]
