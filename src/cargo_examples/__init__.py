"""
cargo-examples - run every example of a locally cloned Cargo project.

Discovers the examples of a crate (``examples/*.rs``, ``examples/*/main.rs``,
``examples/*/Cargo.toml`` sub-projects and ``[[example]]`` declarations in
``Cargo.toml``) and runs them one after another through ``cargo run``.

Entry point::

    cargo examples --help
"""

__version__ = "0.4.0"

from cargo_examples.discovery import (
    DeclaredExample,
    Example,
    ExampleKind,
    FileExample,
    MultiFileExample,
    SubProjectExample,
    discover_examples,
)
from cargo_examples.errors import (
    ConfigError,
    DiscoveryError,
    ExamplesError,
    ExecutionError,
)

__all__ = [
    "__version__",
    "ConfigError",
    "DeclaredExample",
    "DiscoveryError",
    "Example",
    "ExampleKind",
    "ExamplesError",
    "ExecutionError",
    "FileExample",
    "MultiFileExample",
    "SubProjectExample",
    "discover_examples",
]
