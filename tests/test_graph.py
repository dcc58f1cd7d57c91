import itertools

import pytest

from graph import Graph


def test_constructor_rejects_non_sequences():
    with pytest.raises(TypeError):
        Graph("abc", [])
    with pytest.raises(TypeError):
        Graph([], {(0, 1)})
    with pytest.raises(TypeError):
        Graph(None, 5)


def test_empty_and_single_vertex_graphs_are_connected():
    assert Graph().isConnected()
    assert Graph(["A"], []).isConnected()


def test_add_vertex_and_edge_scenario():
    g = Graph()
    assert g.addVertex("A") == 0
    assert g.addVertex("B") == 1
    assert g.addEdge((0, 1)) is True
    assert g.isAdjacent(0, 1)
    assert g.isAdjacent(1, 0)
    assert g.addEdge((1, 0)) is False
    assert g.edgeCount() == 1


def test_self_loop_allowed_once():
    g = Graph(["A"], [])
    assert g.addEdge((0, 0))
    assert not g.addEdge((0, 0))
    assert g.getEdges() == ((0, 0),)


def test_remove_middle_vertex_drops_incident_edges():
    g = Graph(["A", "B", "C"], [(0, 1), (1, 2)])
    assert g.isConnected()
    g.removeVertex(1)
    assert g.getEdges() == ()
    assert g.getVertices() == ("A", "C")
    assert not g.isConnected()


def test_remove_vertex_reindexes_surviving_edges():
    g = Graph(["A", "B", "C", "D"], [(0, 1), (2, 3), (1, 3), (0, 3)])
    g.removeVertex(1)
    assert g.getVertices() == ("A", "C", "D")
    assert g.getEdges() == ((1, 2), (0, 2))
    assert g.isAdjacent(1, 2)
    assert g.isAdjacent(0, 2)
    assert not g.isAdjacent(0, 1)


def test_remove_vertex_handles_consecutive_incident_edges_and_loops():
    g = Graph(["A", "B", "C"], [(1, 1), (0, 1), (1, 2), (0, 2)])
    g.removeVertex(1)
    assert g.getEdges() == ((0, 1),)


@pytest.mark.parametrize("removed", [0, 1, 2, 3, 4])
def test_no_dangling_indices_after_removal(removed):
    edges = [(a, b) for a, b in itertools.combinations(range(5), 2) if (a + b) % 2]
    g = Graph(list("ABCDE"), edges)
    g.removeVertex(removed)
    n = g.vertexCount()
    for a, b in g.getEdges():
        assert 0 <= a < n and 0 <= b < n


def test_get_adjacent_is_deduplicated():
    g = Graph(list("ABCD"), [(0, 1), (0, 2), (1, 2), (2, 3)])
    assert sorted(g.getAdjacent([0, 1])) == [0, 1, 2]
    assert g.getAdjacent([3]) == [2]


def test_get_connected_is_closure():
    g = Graph(list("ABCDE"), [(0, 1), (1, 2), (3, 4)])
    assert sorted(g.getConnected([0])) == [0, 1, 2]
    assert sorted(g.getConnected([4])) == [3, 4]
    assert sorted(g.getConnected([2, 3])) == [0, 1, 2, 3, 4]


@pytest.mark.parametrize("edges,connected", [
    ([], False),
    ([(0, 1), (1, 2), (2, 3)], True),
    ([(0, 1), (2, 3)], False),
    ([(3, 0), (3, 1), (3, 2)], True),
    ([(1, 2), (2, 3), (3, 1)], False),
])
def test_is_connected_matches_closure_size(edges, connected):
    g = Graph(list("ABCD"), edges)
    assert g.isConnected() is connected
    assert (len(g.getConnected([0])) == g.vertexCount()) is connected


def test_notifications_fire_after_mutation_in_order():
    g = Graph()
    seen = []
    g.vertexAdded.connect(lambda i: seen.append(("first", i, g.vertices[i])))
    g.vertexAdded.connect(lambda i: seen.append(("second", i, g.vertexCount())))
    g.addVertex("A")
    assert seen == [("first", 0, "A"), ("second", 0, 1)]


def test_remove_vertex_notifies_edges_then_vertex():
    g = Graph(["A", "B", "C"], [(0, 1), (1, 2), (0, 2)])
    seen = []
    g.edgeRemoved.connect(lambda i: seen.append(("edge", i)))
    g.vertexRemoved.connect(lambda i: seen.append(("vertex", i, g.vertexCount())))
    g.removeVertex(1)
    assert seen == [("edge", 0), ("edge", 0), ("vertex", 1, 2)]


def test_edit_vertex_notifies():
    g = Graph(["A"], [])
    edited = []
    g.vertexEdited.connect(edited.append)
    g.editVertex(0, "Alpha")
    assert g.vertices[0] == "Alpha"
    assert edited == [0]


def test_duplicate_edge_does_not_notify():
    g = Graph(["A", "B"], [(0, 1)])
    added = []
    g.edgeAdded.connect(added.append)
    g.addEdge((1, 0))
    assert added == []


def test_clone_is_independent():
    g = Graph(["A", "B"], [(0, 1)])
    calls = []
    g.vertexAdded.connect(calls.append)
    c = g.clone()
    c.addVertex("C")
    c.removeEdge(0)
    assert g.getVertices() == ("A", "B")
    assert g.getEdges() == ((0, 1),)
    assert calls == []
