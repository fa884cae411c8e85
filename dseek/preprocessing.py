"""
Tagging capability: turns raw text into ordered sentences of tagged terms.

Paragraph markers (``<p>`` or a blank line) are read as boundaries before any
markup is removed. Sentences are split on terminal punctuation, words are
tokenised with NLTK's Treebank tokenizer and tagged with the averaged
perceptron tagger (Penn Treebank tags). Possessives are merged into their
noun and plural nouns are singularised, so "farmers'" and "farmer" share the
normal form ``farmer``.
"""
from __future__ import annotations
import re
import logging
from functools import lru_cache
from typing import Callable, List, Optional, Tuple

import nltk
from nltk.tag import PerceptronTagger
from nltk.tokenize import TreebankWordTokenizer

from .datatypes import Sentence, Term

logger = logging.getLogger(__name__)

PosTagger = Callable[[List[str]], List[Tuple[str, str]]]

TAGGER_RESOURCE = "averaged_perceptron_tagger_eng"

RE_ENTITY    = re.compile(r"&.{2,5};")                      # &quot; &amp; &nbsp;
RE_PARAGRAPH = re.compile(r"<p\b[^<>]*>|\n\s*\n", re.I)     # <p> or a blank line
RE_TAG       = re.compile(r"</?[A-Za-z][^<>]*>")          # tag-shaped markup only
RE_PUNCT     = re.compile(r"^\W+$")

COARSE_TAGS = {
    "Noun": {"NN", "NNS", "NNP", "NNPS"},
    "Verb": {"VB", "VBD", "VBG", "VBN", "VBP", "VBZ", "MD"},
    "Adjective": {"JJ", "JJR", "JJS"},
    "Adverb": {"RB", "RBR", "RBS"},
}
PLURAL_TAGS = {"NNS", "NNPS"}

_tokenizer = TreebankWordTokenizer()


@lru_cache(maxsize=1)
def _perceptron_tagger() -> PerceptronTagger:
    try:
        nltk.data.find(f"taggers/{TAGGER_RESOURCE}/")
    except LookupError:
        logger.warning("NLTK resource %s not found, downloading it", TAGGER_RESOURCE)
        nltk.download(TAGGER_RESOURCE, quiet=True)
    return PerceptronTagger()


def nltk_pos_tag(tokens: List[str]) -> List[Tuple[str, str]]:
    """Default tagger: NLTK's averaged perceptron (loaded once per process)."""
    return _perceptron_tagger().tag(tokens)


def coarse_tag(tag: str) -> str:
    for coarse, tag_set in COARSE_TAGS.items():
        if tag in tag_set:
            return coarse
    return "Other"


def singularize(token: str) -> str:
    # Light plural rules; only applied to tokens tagged as plural nouns
    t = token
    if len(t) > 4 and t.endswith("ies"):
        return t[:-3] + "y"     # stories -> story
    if len(t) > 4 and t.endswith(("sses", "shes", "ches", "xes", "zes")):
        return t[:-2]           # boxes -> box
    if t.endswith(("ss", "us", "is")):
        return t                # glass, virus, analysis
    if len(t) > 3 and t.endswith("s"):
        return t[:-1]           # farmers -> farmer
    return t


def normalize_token(token: str, tag: str) -> str:
    t = token.lower().replace("’", "'")
    if t.endswith("'s"):
        t = t[:-2]
    elif t.endswith("'"):
        t = t[:-1]
    if tag in PLURAL_TAGS:
        t = singularize(t)
    return t


def make_term(token: str, tag: str) -> Term:
    tags = {tag, coarse_tag(tag)}
    if tag in PLURAL_TAGS:
        tags.add("Plural")
    return Term(text=token, normal=normalize_token(token, tag), tags=frozenset(tags))


def merge_possessives(tagged: List[Tuple[str, str]]) -> List[Tuple[str, str]]:
    """Merge ``[noun, 's]`` and ``[nouns, ']`` into one token keeping the noun tag."""
    merged: List[Tuple[str, str]] = []
    for tok, tag in tagged:
        if (merged
                and (tag == "POS" or (tok in {"'", "’"} and merged[-1][0].lower().endswith("s")))
                and merged[-1][1] not in {"PRP", "PRP$", "WP", "WP$"}):
            prev_tok, prev_tag = merged[-1]
            merged[-1] = (prev_tok + tok, prev_tag)
        else:
            merged.append((tok, tag))
    return merged


def split_paragraphs(text: str) -> List[str]:
    # pad markup so a tag never glues two sentences together
    text = text.replace("<", " <").replace(">", "> ")
    text = RE_ENTITY.sub("", text)
    paragraphs = []
    for chunk in RE_PARAGRAPH.split(text):
        chunk = re.sub(r"\s+", " ", RE_TAG.sub(" ", chunk)).strip()
        if chunk:
            paragraphs.append(chunk)
    return paragraphs


def split_sentences(text: str) -> List[str]:
    # Split on . ! ? while keeping order; naive but serviceable
    parts = re.split(r"(?<=[.!?])\s+", text.strip())
    parts = [p.strip() for p in parts if p.strip()]
    return parts


def tag_sentences(text: str, pos_tagger: Optional[PosTagger] = None) -> List[Sentence]:
    pos_tagger = pos_tagger or nltk_pos_tag
    sentences: List[Sentence] = []
    for paragraph in split_paragraphs(text):
        for k, raw in enumerate(split_sentences(paragraph)):
            tokens = _tokenizer.tokenize(raw)
            tagged = merge_possessives(list(pos_tagger(tokens))) if tokens else []
            terms = [make_term(tok, tag) for tok, tag in tagged if not RE_PUNCT.match(tok)]
            sentences.append(Sentence(idx=len(sentences), text=raw, terms=terms,
                                      starts_paragraph=(k == 0)))
    logger.debug("Tagged %d sentences", len(sentences))
    return sentences
