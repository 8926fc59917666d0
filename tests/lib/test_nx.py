import networkx as nx
import pytest

from mstviz.algorithms.kruskal import EdgeProcessingEngine
from mstviz.lib.nx import NodeMap, from_networkx, to_networkx
from mstviz.types.base import EdgeState


def test_node_map_from_names():
    node_map = NodeMap.from_names(["A", "B", "C"])
    assert node_map.to_index["A"] == 0
    assert node_map.to_name[2] == "C"
    assert len(node_map) == 3


def test_from_networkx_sorts_and_maps_names():
    G = nx.Graph()
    G.add_edge("A", "C", weight=5)
    G.add_edge("A", "B", weight=1)
    G.add_edge("B", "C", weight=2)

    graph, node_map = from_networkx(G)
    assert [node_map.to_name[i] for i in range(3)] == ["A", "C", "B"]
    labelled = [
        (node_map.to_name[e.u], node_map.to_name[e.v], e.w) for e in graph.edges
    ]
    # Endpoints keep NetworkX edge orientation
    assert labelled == [("A", "B", 1), ("C", "B", 2), ("A", "C", 5)]


def test_from_networkx_default_weight_and_positions():
    G = nx.Graph()
    G.add_node(0, pos=(1.0, 2.0))
    G.add_node(1)
    G.add_edge(0, 1)
    graph, _ = from_networkx(G)
    assert graph.edges[0].w == 1
    assert (graph.nodes[0].x, graph.nodes[0].y) == (1.0, 2.0)
    assert (graph.nodes[1].x, graph.nodes[1].y) == (0.0, 0.0)


def test_from_networkx_custom_weight_attr():
    G = nx.Graph()
    G.add_edge("x", "y", cost=7)
    graph, _ = from_networkx(G, weight_attr="cost")
    assert graph.edges[0].w == 7


@pytest.mark.parametrize("cls", [nx.DiGraph, nx.MultiGraph, nx.MultiDiGraph])
def test_from_networkx_rejects_directed_and_multi(cls):
    G = cls()
    G.add_edge(0, 1)
    with pytest.raises(TypeError):
        from_networkx(G)


def test_from_networkx_rejects_non_graph():
    with pytest.raises(TypeError):
        from_networkx({"A": ["B"]})


def test_from_networkx_rejects_self_loop():
    G = nx.Graph()
    G.add_edge("A", "A", weight=1)
    with pytest.raises(ValueError, match="Self-loop"):
        from_networkx(G)


def test_to_networkx_round_trip_with_verdicts():
    G = nx.Graph()
    G.add_weighted_edges_from([("A", "B", 1), ("B", "C", 2), ("A", "C", 5)])
    graph, node_map = from_networkx(G)

    engine = EdgeProcessingEngine(graph)
    engine.run_to_completion()

    out = to_networkx(engine.graph, node_map)
    assert set(out.nodes()) == {"A", "B", "C"}
    assert out.edges["A", "C"]["state"] == EdgeState.REJECTED.value
    assert out.edges["A", "B"]["weight"] == 1
    assert out.edges["B", "C"]["edge_id"] == 1

    tree = to_networkx(engine.graph, node_map, accepted_only=True)
    assert sorted(tuple(sorted(e)) for e in tree.edges()) == [("A", "B"), ("B", "C")]
    assert tree.number_of_nodes() == 3


def test_to_networkx_without_node_map(triangle):
    out = to_networkx(triangle)
    assert sorted(out.nodes()) == [0, 1, 2]
    assert out.nodes[0]["pos"] == (0.0, 0.0)
    assert out.number_of_edges() == 3
