"""Tests for cargo_examples.selection: the --from gate and --skip set."""

from __future__ import annotations

import pytest

from cargo_examples.discovery import DeclaredExample
from cargo_examples.selection import (
    ActivationGate,
    GateState,
    parse_name_list,
    select_examples,
)


def _examples(*names: str) -> list[DeclaredExample]:
    return [DeclaredExample(n) for n in names]


def _selected(names, **kwargs) -> list[str]:
    return [e.name for e in select_examples(_examples(*names), **kwargs)]


class TestActivationGate:
    def test_active_without_from(self):
        gate = ActivationGate()
        assert gate.state is GateState.ACTIVE
        assert gate.active

    def test_inactive_until_exact_match(self):
        gate = ActivationGate("c")
        assert gate.observe("a") is GateState.INACTIVE
        assert gate.observe("cc") is GateState.INACTIVE
        assert gate.observe("c") is GateState.ACTIVE
        assert gate.matched

    def test_stays_active(self):
        gate = ActivationGate("b")
        gate.observe("b")
        assert gate.observe("a") is GateState.ACTIVE


class TestSelectExamples:
    NAMES = ("a", "b", "bar", "baz", "c", "d")

    def test_everything_by_default(self):
        assert _selected(self.NAMES) == list(self.NAMES)

    def test_from(self):
        assert _selected(self.NAMES, start_from="c") == ["c", "d"]

    def test_skip(self):
        assert _selected(self.NAMES, skip=["a", "b"]) == ["bar", "baz", "c", "d"]

    def test_skip_wins_over_from(self):
        assert _selected(self.NAMES, start_from="a", skip=["a", "b"]) == ["bar", "baz", "c", "d"]

    def test_skipped_from_still_activates(self):
        assert _selected(self.NAMES, start_from="baz", skip=["baz"]) == ["c", "d"]

    def test_unknown_from_selects_nothing(self):
        assert _selected(self.NAMES, start_from="zzz") == []

    def test_from_is_not_a_prefix_match(self):
        assert _selected(self.NAMES, start_from="ba") == []

    def test_duplicates_both_filtered(self):
        assert _selected(("x", "x", "y"), skip=["x"]) == ["y"]

    def test_lazy(self):
        gen = select_examples(_examples("a", "b"))
        assert next(gen).name == "a"


class TestParseNameList:
    @pytest.mark.parametrize(
        ("values", "expected"),
        [
            (None, []),
            ([], []),
            (["a"], ["a"]),
            (["a,b"], ["a", "b"]),
            (["a,b", "c"], ["a", "b", "c"]),
            (["a,,b,"], ["a", "b"]),
        ],
    )
    def test_flattening(self, values, expected):
        assert parse_name_list(values) == expected
