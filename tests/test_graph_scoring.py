"""Sentence graph construction and centrality ranking."""
import pytest
import networkx as nx

from dseek.config import DAMPING
from dseek.datatypes import Keyphrase, Sentence
from dseek.graphing import build_graph, build_adjacency, sentence_keyphrase_map, to_networkx
from dseek.scoring import pagerank_scores, rank_sentences


def sentences(n):
    return [Sentence(idx=i, text=f"Sentence {i}.") for i in range(n)]


def kp(text, idxs, weight):
    return Keyphrase(text=text, sentences=idxs, words=len(text.split()), weight=weight)


def test_edges_sum_shared_keyphrase_weights():
    graph = build_graph(sentences(3), [
        kp("climate change", [0, 1, 2], 5.0),
        kp("graph theory", [0, 1], 2.0),
    ])
    assert [(e.i, e.j, e.weight) for e in graph.edges] == [(0, 1, 7.0), (0, 2, 5.0), (1, 2, 5.0)]
    assert [k.text for k in graph.keyphrases[0]] == ["climate change", "graph theory"]


def test_zero_weight_keyphrases_make_no_edges():
    graph = build_graph(sentences(2), [kp("climate change", [0, 1], 0.0)])
    assert graph.edges == []
    assert [k.text for k in graph.keyphrases[1]] == ["climate change"]


def test_keyphrase_map_ignores_unknown_sentences():
    mapping = sentence_keyphrase_map(sentences(2), [kp("graph theory", [1, 7], 1.0)])
    assert list(mapping) == [0, 1]
    assert mapping[0] == [] and len(mapping[1]) == 1


def test_adjacency_is_symmetric():
    graph = build_graph(sentences(3), [kp("graph theory", [0, 2], 2.0)])
    assert build_adjacency(graph) == [[(2, 2.0)], [], [(0, 2.0)]]


def test_to_networkx():
    graph = build_graph(sentences(3), [kp("graph theory", [0, 2], 2.0)])
    G = to_networkx(graph)
    assert isinstance(G, nx.Graph)
    assert sorted(G.nodes) == [0, 1, 2]
    assert G[0][2]["weight"] == 2.0
    assert G.nodes[2]["keyphrases"] == ["graph theory"]


def test_degenerate_graphs():
    assert pagerank_scores(build_graph([], [])) == []
    assert pagerank_scores(build_graph(sentences(1), [])) == [1.0]
    ranked = rank_sentences(build_graph(sentences(1), []))
    assert [(r.idx, r.score) for r in ranked] == [(0, 1.0)]


def test_isolated_sentence_keeps_teleport_score():
    graph = build_graph(sentences(3), [kp("graph theory", [0, 1], 3.0)])
    scores = pagerank_scores(graph)
    assert scores[2] == pytest.approx((1 - DAMPING) / 3)
    assert scores[0] == scores[1]
    assert scores[0] > scores[2]


def test_hub_sentence_ranks_first():
    graph = build_graph(sentences(4), [
        kp("climate change", [1, 0], 1.0),
        kp("graph theory", [1, 2], 1.0),
        kp("neural network", [1, 3], 1.0),
    ])
    ranked = rank_sentences(graph)
    assert ranked[0].idx == 1
    # remaining leaves tie and keep document order
    assert [r.idx for r in ranked[1:]] == [0, 2, 3]


def test_heavier_edges_pull_more_weight():
    graph = build_graph(sentences(3), [
        kp("climate change", [0, 1], 10.0),
        kp("graph theory", [1, 2], 1.0),
    ])
    scores = pagerank_scores(graph)
    assert scores[0] > scores[2]


def test_no_edges_keeps_document_order():
    ranked = rank_sentences(build_graph(sentences(4), []))
    assert [r.idx for r in ranked] == [0, 1, 2, 3]
    assert len({r.score for r in ranked}) == 1


def test_ranking_is_deterministic():
    phrases = [kp("climate change", [0, 2, 4], 3.5), kp("graph theory", [1, 2, 3], 1.25)]
    first = [(r.idx, r.score) for r in rank_sentences(build_graph(sentences(5), phrases))]
    second = [(r.idx, r.score) for r in rank_sentences(build_graph(sentences(5), phrases))]
    assert first == second
