from __future__ import annotations
import logging
from typing import Dict, List, Sequence, Tuple
from .datatypes import Sentence, Term

logger = logging.getLogger(__name__)

# (phrase text, word count) -> ascending sentence indices, in discovery order
NGramTable = Dict[Tuple[str, int], List[int]]

def noun_edge_gram(terms: Sequence[Term], start: int, n: int, min_word_length: int,
                   allow_inner_verbs: bool = False) -> str:
    """
    Phrase text of ``terms[start:start+n]`` if it is a noun-edge gram, else "".

    A noun-edge gram starts and ends on a noun and every word in it has a
    normal form of at least ``min_word_length`` characters. Unless
    ``allow_inner_verbs`` is set, a gram never spans a verb, so clauses like
    "farmers feel climate change" are not mined as phrases.
    """
    gram = terms[start:start + n]
    if len(gram) < n or n < 1:
        return ""
    if not (gram[0].is_noun and gram[-1].is_noun):
        return ""
    if any(len(t.normal) < min_word_length for t in gram):
        return ""
    if not allow_inner_verbs and any("Verb" in t.tags for t in gram[1:-1]):
        return ""
    return " ".join(t.normal for t in gram)

def extract_sentence_grams(sentence: Sentence, table: NGramTable,
                           min_words: int, max_words: int, min_word_length: int,
                           allow_inner_verbs: bool = False) -> None:
    terms = sentence.terms
    for i in range(len(terms)):
        for n in range(min_words, max_words + 1):
            text = noun_edge_gram(terms, i, n, min_word_length, allow_inner_verbs)
            if not text:
                continue
            occurrences = table.setdefault((text, n), [])
            if not occurrences or occurrences[-1] != sentence.idx:
                occurrences.append(sentence.idx)

def extract_ngrams(sentences: Sequence[Sentence], min_words: int = 2, max_words: int = 5,
                   min_word_length: int = 3, allow_inner_verbs: bool = False) -> NGramTable:
    table: NGramTable = {}
    for s in sentences:
        extract_sentence_grams(s, table, min_words, max_words, min_word_length, allow_inner_verbs)
    logger.debug("Mined %d noun-edge gram candidates from %d sentences", len(table), len(sentences))
    return table
