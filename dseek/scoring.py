from __future__ import annotations
import logging
from typing import List
from .config import DAMPING, MAX_ITERATIONS, TOLERANCE
from .datatypes import SentenceGraph, RankedSentence
from .graphing import build_adjacency

logger = logging.getLogger(__name__)

def pagerank_scores(graph: SentenceGraph, damping: float = DAMPING,
                    max_iter: int = MAX_ITERATIONS, tolerance: float = TOLERANCE) -> List[float]:
    """
    Weighted PageRank over the sentence graph.

    PR(Si) = (1-d)/N + d × Σ(PR(Sj) × w(j,i) / W(Sj))

    where W(Sj) is the total weight of Sj's edges. Isolated sentences keep the
    teleport score (1-d)/N. With fewer than two sentences every sentence gets
    1/N and no iteration is run.

    Returns:
        List of scores, aligned with ``graph.nodes``
    """
    n = len(graph.nodes)
    if n == 0:
        return []
    if n < 2:
        return [1.0 / n] * n

    adj = build_adjacency(graph)
    strength = [sum(w for _, w in neighbours) for neighbours in adj]

    pr_scores = [1.0 / n] * n
    iterations = 0
    for iterations in range(1, max_iter + 1):
        new_pr_scores = [(1.0 - damping) / n] * n
        for i in range(n):
            for j, w in adj[i]:
                # strength[j] > 0 since j has at least the edge to i
                new_pr_scores[i] += damping * pr_scores[j] * w / strength[j]

        diff = sum(abs(new_pr_scores[i] - pr_scores[i]) for i in range(n))
        pr_scores = new_pr_scores
        if diff < tolerance:
            break
    logger.debug("Centrality stopped after %d iterations over %d sentences", iterations, n)
    return pr_scores

def rank_sentences(graph: SentenceGraph) -> List[RankedSentence]:
    """Sentences by descending centrality; ties keep document order."""
    scores = pagerank_scores(graph)
    ranked = [
        RankedSentence(
            idx=s.idx,
            text=s.text,
            score=scores[k],
            keyphrases=[kp.text for kp in graph.keyphrases.get(s.idx, [])],
        )
        for k, s in enumerate(graph.nodes)
    ]
    ranked.sort(key=lambda r: r.score, reverse=True)
    return ranked
