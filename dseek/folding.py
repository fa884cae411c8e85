"""
Keyphrase folding: collapses overlapping noun-edge grams into keyphrases.

Longer grams are folded first so they absorb their sub-phrases. A gram folds
into every existing keyphrase that contains it, or that contains the gram
minus its last word. Folding adds the gram's weight (divided by the
keyphrase's word count) and its sentences to the keyphrase; once the gram
outweighs the keyphrase, the keyphrase takes the gram's text.
"""
from __future__ import annotations
import math
import logging
from dataclasses import replace
from typing import Iterable, List

from .config import DseekConfig, QUERY_BONUS
from .datatypes import Keyphrase
from .ngrams import NGramTable
from .phrase_model import PhraseModel
from .phrase_tokenizer import tokenize_phrase, tokens_specificity, is_entity

logger = logging.getLogger(__name__)

# Minimum length of a truncated gram for prefix folding
MIN_PREFIX_LENGTH = 5


def build_candidates(table: NGramTable) -> List[Keyphrase]:
    return [
        Keyphrase(text=text, sentences=list(sentences), words=n,
                  weight=float(len(sentences) * n))
        for (text, n), sentences in table.items()
    ]


def folds_into(container: str, phrase: str) -> bool:
    if phrase in container:
        return True
    last_space = phrase.rfind(" ")
    return last_space > MIN_PREFIX_LENGTH and phrase[:last_space] in container


def fold_keyphrases(candidates: Iterable[Keyphrase]) -> List[Keyphrase]:
    folded: List[Keyphrase] = []
    for cand in sorted(candidates, key=lambda k: k.words, reverse=True):
        absorbed = False
        for entry in folded:
            if not folds_into(entry.text, cand.text):
                continue
            entry.weight += cand.weight / len(entry.text.split(" "))
            entry.merge_sentences(cand.sentences)
            if entry.weight < cand.weight:
                entry.text = cand.text
                entry.words = cand.words
            absorbed = True
        if not absorbed and cand.sentences:
            folded.append(replace(cand, sentences=list(cand.sentences)))
    return folded


def apply_query_bias(keyphrases: List[Keyphrase], query: str) -> None:
    if not query:
        return
    for k in keyphrases:
        if k.text == query:
            k.weight += QUERY_BONUS
            k.biased = True


def dedupe(keyphrases: List[Keyphrase]) -> List[Keyphrase]:
    """Sort by weight, keeping only the heaviest keyphrase for each text."""
    seen = set()
    unique = []
    for k in sorted(keyphrases, key=lambda k: k.weight, reverse=True):
        if k.text in seen:
            continue
        seen.add(k.text)
        unique.append(k)
    return unique


def score_keyphrases(keyphrases: List[Keyphrase], model: PhraseModel,
                     longest_first: bool = False) -> List[Keyphrase]:
    for k in keyphrases:
        tokens = tokenize_phrase(k.text, model, longest_first=longest_first)
        if is_entity(tokens):
            k.is_entity = True
            k.weight *= 2
        k.specificity = tokens_specificity(tokens)
        k.weight *= k.specificity
    return keyphrases


def scoring_limit(total: int, cfg: DseekConfig) -> int:
    return max(math.floor(total * cfg.top_keyphrases_percent), cfg.limit_top_keyphrases)


def select_keyphrases(table: NGramTable, model: PhraseModel, cfg: DseekConfig) -> List[Keyphrase]:
    """
    Fold, bias, dedupe and score the mined grams.

    Only the heaviest ``scoring_limit`` keyphrases are scored against the
    phrase model; the rest are dropped. The result is sorted by final
    weight with the query-biased keyphrase (if any) first.
    """
    folded = fold_keyphrases(build_candidates(table))
    apply_query_bias(folded, cfg.heavy_weight_query)
    unique = dedupe(folded)
    limit = scoring_limit(len(folded), cfg)
    scored = score_keyphrases(unique[:limit], model, longest_first=cfg.longest_match_first)
    kept = [k for k in scored if len(k.text) > cfg.min_keyphrase_length]
    kept.sort(key=lambda k: (k.biased, k.weight), reverse=True)
    logger.debug("Folded %d grams into %d keyphrases, kept %d of %d scored",
                 len(table), len(unique), len(kept), len(scored))
    return kept
