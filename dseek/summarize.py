"""
DSEEK - Domain Specific Extraction of Entities & Keyphrases.

Weights sentences by the noun keyphrases they share, to find the sentences
that tie together the concepts most referred to by other sentences. Based
on TextRank: a random surfer follows keyphrase links between sentences and
the probability of landing on a sentence ranks its influence.

References:
    Zhao & Xie (2021), "An Improved TextRank Multi-feature Fusion Algorithm
    For Keyword Extraction of Educational Resources".
    Kazemi et al. (2020), "Biased TextRank: Unsupervised Graph-Based Content
    Extraction".
"""
from __future__ import annotations
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .config import DseekConfig
from .datatypes import Keyphrase, RankedSentence, SentenceGraph
from .folding import select_keyphrases
from .graphing import build_graph
from .ngrams import extract_ngrams
from .phrase_model import PhraseModel, load_default_model
from .preprocessing import PosTagger, tag_sentences
from .scoring import rank_sentences

logger = logging.getLogger(__name__)

@dataclass
class DseekResult:
    top_sentences: List[RankedSentence] = field(default_factory=list)
    keyphrases: List[Keyphrase] = field(default_factory=list)
    sentences: List[str] = field(default_factory=list)
    graph: Optional[SentenceGraph] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "top_sentences": [
                {"index": s.idx, "text": s.text, "keyphrases": list(s.keyphrases)}
                for s in self.top_sentences
            ],
            "keyphrases": [
                {
                    "keyphrase": k.text,
                    "sentences": ",".join(str(i) for i in k.sentences),
                    "words": k.words,
                    "weight": k.weight,
                    "wiki": k.is_entity,
                    "specificity": k.specificity or 0.0,
                }
                for k in self.keyphrases
            ],
            "sentences": list(self.sentences),
        }

def _resolve_config(config: Optional[DseekConfig], options: Dict[str, Any]) -> DseekConfig:
    if config is None:
        return DseekConfig.from_mapping(options)
    if options:
        return DseekConfig.from_mapping({**asdict(config), **options})
    return config.validate()

def weight_keyphrases_sentences(text: str,
                                config: Optional[DseekConfig] = None,
                                model: Optional[PhraseModel] = None,
                                pos_tagger: Optional[PosTagger] = None,
                                **options: Any) -> DseekResult:
    """
    Rank keyphrases and sentences of one document.

    Args:
        text: document text, may carry ``<p>`` paragraph markers
        config: options; keyword ``options`` (camelCase or snake_case) override it
        model: shared phrase model, the bundled sample model when omitted
        pos_tagger: ``tokens -> [(token, tag)]``, NLTK's perceptron tagger when omitted

    Raises:
        TypeError: if ``text`` is not a string
        ValueError: on invalid options
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be a string, got {type(text).__name__}")
    cfg = _resolve_config(config, options)
    if model is None:
        model = load_default_model()

    sentences = tag_sentences(text, pos_tagger)
    table = extract_ngrams(sentences, cfg.min_words, cfg.max_words,
                           cfg.min_word_length, cfg.allow_inner_verbs)
    keyphrases = select_keyphrases(table, model, cfg)
    graph = build_graph(sentences, keyphrases)
    ranked = rank_sentences(graph)
    logger.debug("Ranked %d sentences with %d keyphrases", len(ranked), len(keyphrases))

    return DseekResult(
        top_sentences=ranked[:cfg.limit_top_sentences],
        keyphrases=keyphrases[:cfg.limit_top_keyphrases],
        sentences=[s.text for s in sentences],
        graph=graph,
    )

def generate_summary(result: DseekResult) -> str:
    # top sentences joined back in document order
    selected = sorted(result.top_sentences, key=lambda s: s.idx)
    return " ".join(s.text for s in selected)

def summarize(text: str, model: Optional[PhraseModel] = None,
              pos_tagger: Optional[PosTagger] = None, **options: Any) -> Dict[str, Any]:
    # Pipeline glue
    return weight_keyphrases_sentences(text, model=model, pos_tagger=pos_tagger, **options).to_dict()
