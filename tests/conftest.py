"""Shared fixtures: small expense and sales trees used across the suite."""

from __future__ import annotations

import pytest

from aggtree import Label, Node
from aggtree.ids import SequentialIdSource, use_id_source


@pytest.fixture(autouse=True)
def sequential_ids():
    """Deterministic node ids for every test."""
    with use_id_source(SequentialIdSource(prefix="n")) as source:
        yield source


@pytest.fixture
def expenses() -> Node:
    """Expenses per year -> Food -> Junk food (123.4)."""
    junk_food = Node("Junk food", 123.4)
    food = Node("Food", [junk_food])
    return Node("Expenses per year", [food])


@pytest.fixture
def year_labels() -> dict[str, Label]:
    """Labels whose identity is a (start, end) date range."""
    return {
        year: Label(
            year,
            identity=[f"{year}-01-01", f"{year}-12-31"],
            metadata={"started_on": f"{year}-01-01", "ended_on": f"{year}-12-31"},
        )
        for year in ("2013", "2014", "2015")
    }


@pytest.fixture
def sales(year_labels: dict[str, Label]) -> Node:
    """Root -> company -> city -> yearly figures.

    Root
    |- Bobs bouw NL: Amsterdam (2014: 1, 2013: 33), Nijmegen (2015: 100, 2014: 2)
    |- Bobs bouw UK: London (2014: 3, 2013: 44), Reading (2014: 4, 2014: 5)
    |- Bobs bouw DE: Berlin (2013: 55, 2014: 6), Koeln (2014: 7, 2015: 200)
    """
    y = year_labels

    def city(name: str, *figures: tuple[str, int]) -> Node:
        return Node(name, [Node(y[year], amount) for year, amount in figures])

    root = Node("Root", [])
    nl = root.add_child(Node("Bobs bouw NL", []))
    nl.add_child(city("Amsterdam", ("2014", 1), ("2013", 33)))
    nl.add_child(city("Nijmegen", ("2015", 100), ("2014", 2)))
    uk = root.add_child(Node("Bobs bouw UK", []))
    uk.add_child(city("London", ("2014", 3), ("2013", 44)))
    uk.add_child(city("Reading", ("2014", 4), ("2014", 5)))
    de = root.add_child(Node("Bobs bouw DE", []))
    de.add_child(city("Berlin", ("2013", 55), ("2014", 6)))
    de.add_child(city("Koeln", ("2014", 7), ("2015", 200)))
    return root
