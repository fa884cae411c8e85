from __future__ import annotations
from typing import Dict, List, Sequence, Tuple
import networkx as nx
from .datatypes import Keyphrase, Sentence, SentenceGraph, Edge

def sentence_keyphrase_map(sentences: Sequence[Sentence],
                           keyphrases: Sequence[Keyphrase]) -> Dict[int, List[Keyphrase]]:
    # invert keyphrase -> sentences; keyphrases stay in ranked order per sentence
    mapping: Dict[int, List[Keyphrase]] = {s.idx: [] for s in sentences}
    for k in keyphrases:
        for idx in k.sentences:
            if idx in mapping:
                mapping[idx].append(k)
    return mapping

def build_graph(sentences: Sequence[Sentence], keyphrases: Sequence[Keyphrase]) -> SentenceGraph:
    """
    Sentences are nodes; two sentences are linked when they share a keyphrase,
    weighted by the summed weight of all keyphrases they share.
    """
    mapping = sentence_keyphrase_map(sentences, keyphrases)
    weights: Dict[Tuple[int, int], float] = {}
    for k in keyphrases:
        idxs = [i for i in k.sentences if i in mapping]
        for a in range(len(idxs)):
            for b in range(a + 1, len(idxs)):
                key = (min(idxs[a], idxs[b]), max(idxs[a], idxs[b]))
                weights[key] = weights.get(key, 0.0) + k.weight
    edges = [Edge(i=i, j=j, weight=w) for (i, j), w in sorted(weights.items()) if w > 0]
    return SentenceGraph(nodes=list(sentences), edges=edges, keyphrases=mapping)

def build_adjacency(graph: SentenceGraph) -> List[List[Tuple[int, float]]]:
    n = len(graph.nodes)
    pos = {s.idx: k for k, s in enumerate(graph.nodes)}
    adj: List[List[Tuple[int, float]]] = [[] for _ in range(n)]
    for e in graph.edges:
        adj[pos[e.i]].append((pos[e.j], e.weight))
        adj[pos[e.j]].append((pos[e.i], e.weight))
    return adj

def to_networkx(graph: SentenceGraph) -> nx.Graph:
    G = nx.Graph()
    for s in graph.nodes:
        G.add_node(s.idx, text=s.text,
                   keyphrases=[k.text for k in graph.keyphrases.get(s.idx, [])])
    for e in graph.edges:
        G.add_edge(e.i, e.j, weight=e.weight)
    return G
