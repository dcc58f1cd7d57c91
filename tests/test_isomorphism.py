from concurrent.futures import ThreadPoolExecutor

import pytest

from graph import Graph
from isomorphism import (
    IsomorphismChecker, getAdjacency, graphMessage, isIsomorphic, permute, swap,
)


def test_adjacency_is_symmetric():
    a = getAdjacency(3, [(0, 1), (2, 2)])
    assert a == [[0, 1, 0], [1, 0, 0], [0, 0, 1]]


def test_swap_relabels_rows_and_columns():
    a = getAdjacency(3, [(0, 1)])
    swap(a, 1, 2)
    assert a == getAdjacency(3, [(0, 2)])


def test_permute_visits_every_ordering():
    seen = set()

    def record(m):
        seen.add(tuple(tuple(row) for row in m))
        return False

    # Path 0-1-2: three distinct relabelings by middle vertex
    assert not permute(3, getAdjacency(3, [(0, 1), (1, 2)]), record)
    assert len(seen) == 3


def test_graph_message_is_plain_data():
    assert graphMessage(Graph(["A", "B"], [(1, 0)])) == (2, ((1, 0),))


@pytest.mark.parametrize("g,g2,expected", [
    ((3, ((0, 1), (1, 2))), (3, ((0, 1), (1, 2))), True),
    ((3, ((0, 1), (1, 2))), (3, ((0, 2), (2, 1))), True),
    ((3, ((0, 1), (1, 2))), (4, ((0, 1), (1, 2))), False),
    ((4, ((0, 1), (1, 2), (2, 3))), (4, ((0, 1), (0, 2), (0, 3))), False),
    ((4, ((0, 1), (1, 2), (2, 3), (3, 0))), (4, ((0, 2), (2, 1), (1, 3), (3, 0))), True),
    ((3, ((0, 1), (1, 2), (2, 0))), (3, ((0, 1), (1, 2))), False),
    ((2, ((0, 0),)), (2, ((1, 1),)), True),
    ((0, ()), (0, ()), True),
])
def test_is_isomorphic(g, g2, expected):
    assert isIsomorphic(g, g2) is expected
    assert isIsomorphic(g2, g) is expected


def test_checker_with_injected_executor():
    with ThreadPoolExecutor(max_workers=1) as pool:
        checker = IsomorphismChecker(pool)
        a = Graph(["A", "B", "C"], [(0, 1), (1, 2)])
        b = Graph(["x", "y", "z"], [(2, 0), (0, 1)])
        c = Graph(["x", "y", "z"], [(0, 1), (1, 2), (2, 0)])
        assert checker.submit(a, b).result(timeout=10) is True
        assert checker.submit(a, c).result(timeout=10) is False
        checker.shutdown()
        # Injected executors belong to the caller
        assert checker.submit(a, a).result(timeout=10) is True


def test_checker_snapshot_is_taken_at_submit():
    with ThreadPoolExecutor(max_workers=1) as pool:
        checker = IsomorphismChecker(pool)
        a = Graph(["A", "B"], [(0, 1)])
        b = a.clone()
        future = checker.submit(a, b)
        a.addVertex("C")
        assert future.result(timeout=10) is True


def test_checker_runs_in_worker_process():
    checker = IsomorphismChecker()
    try:
        a = Graph(list("ABCD"), [(0, 1), (1, 2), (2, 3)])
        b = Graph(list("ABCD"), [(3, 1), (1, 0), (0, 2)])
        assert checker.submit(a, b).result(timeout=60) is True
    finally:
        checker.shutdown()
