from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, FrozenSet, Optional, Union

@dataclass(frozen=True)
class Term:
    text: str
    normal: str
    tags: FrozenSet[str] = frozenset()

    @property
    def is_noun(self) -> bool:
        return "Noun" in self.tags

@dataclass
class Sentence:
    idx: int
    text: str
    terms: List[Term] = field(default_factory=list)
    starts_paragraph: bool = False

@dataclass
class Keyphrase:
    text: str
    sentences: List[int]  # ascending, unique
    words: int
    weight: float
    is_entity: bool = False
    specificity: Optional[float] = None
    biased: bool = False  # matched the heavy-weight query

    def merge_sentences(self, other: List[int]) -> None:
        self.sentences = sorted(set(self.sentences).union(other))

@dataclass(frozen=True)
class PhraseModelEntry:
    continuation: Optional[str] = None
    specificity: Optional[float] = None

@dataclass(frozen=True)
class KnownToken:
    text: str
    specificity: Optional[float] = None
    continuation: Optional[str] = None

@dataclass(frozen=True)
class UnknownToken:
    text: str

PhraseToken = Union[KnownToken, UnknownToken]

@dataclass
class Edge:
    i: int
    j: int
    weight: float  # sum of shared keyphrase weights

@dataclass
class SentenceGraph:
    nodes: List[Sentence]
    edges: List[Edge]  # undirected weighted edges
    keyphrases: Dict[int, List[Keyphrase]] = field(default_factory=dict)

@dataclass
class RankedSentence:
    idx: int
    text: str
    score: float
    keyphrases: List[str] = field(default_factory=list)
