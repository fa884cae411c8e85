from .datatypes import Term, Sentence, Keyphrase, KnownToken, UnknownToken, PhraseToken, Edge, SentenceGraph, RankedSentence
from .config import DseekConfig
from .phrase_model import PhraseModel, PhraseModelError, load_default_model
from .phrase_tokenizer import tokenize_phrase, phrase_specificity, is_entity
from .preprocessing import tag_sentences, nltk_pos_tag
from .ngrams import extract_ngrams
from .folding import fold_keyphrases, select_keyphrases
from .graphing import build_graph, to_networkx
from .scoring import pagerank_scores, rank_sentences
from .summarize import DseekResult, weight_keyphrases_sentences, summarize, generate_summary
