"""Shared graph fixtures for the test suite."""

from __future__ import annotations

import random

import pytest

from mstviz.model.graph import Graph


@pytest.fixture
def triangle():
    #      [1]      [2]
    #   0───────1───────2
    #   └───────────────┘
    #          [5]
    return Graph.from_weighted_edges(3, [(0, 1, 1), (1, 2, 2), (0, 2, 5)])


@pytest.fixture
def square_with_diagonal():
    #   0──[1]──1
    #   │ ╲     │
    #  [4] [2] [3]
    #   │     ╲ │
    #   3──[5]──2
    return Graph.from_weighted_edges(
        4, [(0, 1, 1), (0, 2, 2), (1, 2, 3), (0, 3, 4), (3, 2, 5)]
    )


@pytest.fixture
def two_islands():
    # {0,1,2} and {3,4} with no edge between them
    return Graph.from_weighted_edges(
        5, [(0, 1, 3), (1, 2, 1), (0, 2, 2), (3, 4, 7)]
    )


@pytest.fixture
def equal_weights():
    # Every edge weighs 1; order is whatever the provider supplied
    return Graph.from_weighted_edges(
        4, [(2, 3, 1), (0, 1, 1), (1, 2, 1), (0, 3, 1), (0, 2, 1)]
    )


def random_triples(n: int, p: float, seed: int):
    rng = random.Random(seed)
    triples = []
    for i in range(n):
        for j in range(i + 1, n):
            if rng.random() <= p:
                triples.append((i, j, rng.randint(1, 20)))
    return triples


@pytest.fixture
def random_graphs():
    """A spread of seeded random graphs, connected or not."""
    graphs = []
    for seed in range(12):
        n = 3 + seed * 2
        p = 0.15 + 0.07 * seed
        graphs.append(Graph.from_weighted_edges(n, random_triples(n, p, seed)))
    return graphs
