"""Tests for cargo_examples.errors."""

from __future__ import annotations

from cargo_examples.errors import (
    ConfigError,
    DiscoveryError,
    ErrorCategory,
    ExamplesError,
    ExecutionError,
    ManifestNotFoundError,
    ManifestParseError,
)


class TestExamplesError:
    def test_defaults(self):
        err = ExamplesError("boom")
        assert err.category is ErrorCategory.INTERNAL
        assert err.exit_code == 1
        assert str(err) == "boom"

    def test_cause_is_chained(self):
        cause = OSError("disk")
        err = DiscoveryError("cannot read", cause=cause)
        assert err.__cause__ is cause
        assert err.to_dict()["cause"] == "disk"

    def test_with_context(self):
        err = ConfigError("bad").with_context(path="Cargo.toml")
        assert err.to_dict() == {
            "error_type": "ConfigError",
            "message": "bad",
            "category": "CONFIG",
            "exit_code": 2,
            "context": {"path": "Cargo.toml"},
        }

    def test_repr(self):
        assert repr(DiscoveryError("x")) == "DiscoveryError('x', category=DISCOVERY)"


class TestSubclasses:
    def test_manifest_not_found(self):
        err = ManifestNotFoundError("some/dir")
        assert isinstance(err, ConfigError)
        assert err.context == {"path": "some/dir"}

    def test_manifest_parse(self):
        err = ManifestParseError("Cargo.toml", cause=ValueError("line 1"))
        assert "line 1" in err.message
        assert err.exit_code == 2

    def test_discovery_exit_code(self):
        assert DiscoveryError("x").exit_code == 3

    def test_execution_context(self):
        err = ExecutionError("failed", example="foo", returncode=4, command=["cargo", "run"])
        assert err.category is ErrorCategory.EXECUTION
        assert err.exit_code == 4
        assert err.context == {"example": "foo", "returncode": 4, "command": "cargo run"}
