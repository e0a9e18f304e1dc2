"""
Example selection: the ``--from`` activation gate and the ``--skip`` set.

The gate is a two-state machine walked over the sorted example list::

    INACTIVE ──(name == from)──▶ ACTIVE

It starts ACTIVE when no ``--from`` is given. Skipped names never run, but
a skipped ``--from`` example still flips the gate, so
``--from=baz --skip=baz`` runs everything after ``baz``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from cargo_examples.discovery import Example
from cargo_examples.logging import get_logger

logger = get_logger(__name__)


class GateState(str, Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


@dataclass
class ActivationGate:
    """Tracks whether execution has reached the ``--from`` example."""

    start_from: str | None = None
    state: GateState = field(init=False)
    matched: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.state = GateState.ACTIVE if self.start_from is None else GateState.INACTIVE

    @property
    def active(self) -> bool:
        return self.state is GateState.ACTIVE

    def observe(self, name: str) -> GateState:
        """Feed the next name in sort order; flips to ACTIVE on an exact match."""
        if self.state is GateState.INACTIVE and name == self.start_from:
            self.state = GateState.ACTIVE
            self.matched = True
            logger.debug("selection.activated", example=name)
        return self.state


def parse_name_list(values: Iterable[str] | None) -> list[str]:
    """Flatten repeated, comma-delimited option values (``-s a,b -s c``)."""
    names: list[str] = []
    for value in values or ():
        names.extend(part for part in value.split(",") if part)
    return names


def select_examples(
    examples: Iterable[Example],
    *,
    start_from: str | None = None,
    skip: Iterable[str] = (),
) -> Iterator[Example]:
    """Yield the examples that should be printed / run, in input order."""
    gate = ActivationGate(start_from)
    skip_set = frozenset(skip)

    for example in examples:
        name = example.name
        if name is None:
            continue

        gate.observe(name)

        if name in skip_set:
            logger.debug("selection.skipped", example=name)
            continue

        if not gate.active:
            continue

        yield example

    if start_from is not None and not gate.matched:
        logger.warning("selection.from_not_found", start_from=start_from)


__all__ = [
    "ActivationGate",
    "GateState",
    "parse_name_list",
    "select_examples",
]
