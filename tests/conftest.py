import pytest

from dseek.datatypes import Sentence
from dseek.phrase_model import PhraseModel
from dseek.preprocessing import make_term

MODEL_DATA = {
    "cl": {"climate": [{"n": "change", "u": 6.0}, {"n": "change mitigation", "u": 9.0}, {"u": 4.0}]},
    "ch": {"change": [{"u": 2.0}]},
    "ec": {"economy": [{"u": 3.0}]},
    "we": {"weather": [{"n": "forecast", "u": 5.0}, {"u": 2.0}]},
    "to": {"today": [{"u": 1.0}]},
    "fa": {"farmer": [{"u": 4.0}]},
    "ne": {"neural": [{"n": "network", "u": 8.0}], "network": [{"u": 3.0}]},
}

# Penn tags for the words used in the test documents
LEXICON = {
    "the": "DT", "a": "DT", "is": "VBZ", "are": "VBP", "affects": "VBZ", "feel": "VBP",
    "impacts": "VBZ", "local": "JJ", "sunny": "JJ", "directly": "RB", "new": "JJ",
    "train": "VBP", "trains": "VBZ", "uses": "VBZ", "use": "VBP", "and": "CC",
    "of": "IN", "in": "IN", "on": "IN", "for": "IN", "with": "IN", "it": "PRP",
    "farmers": "NNS", "networks": "NNS", "models": "NNS", "researchers": "NNS",
    "'s": "POS", "slowly": "RB", "grows": "VBZ", "was": "VBD", "matters": "VBZ",
}

def lexicon_tagger(tokens):
    """Deterministic stand-in for the perceptron tagger: unknown words are nouns."""
    tagged = []
    for tok in tokens:
        low = tok.lower()
        if low in LEXICON:
            tagged.append((tok, LEXICON[low]))
        elif not any(ch.isalnum() for ch in tok):
            tagged.append((tok, "."))
        else:
            tagged.append((tok, "NN"))
    return tagged

def make_sentence(idx, words):
    """Sentence from (word, tag) pairs."""
    terms = [make_term(w, t) for w, t in words]
    return Sentence(idx=idx, text=" ".join(w for w, _ in words), terms=terms)

@pytest.fixture
def model():
    return PhraseModel.from_dict(MODEL_DATA)

@pytest.fixture
def tagger():
    return lexicon_tagger

EXAMPLE_TEXT = (
    "Climate change affects the economy. "
    "Local farmers feel climate change impacts directly. "
    "The weather today is sunny."
)
