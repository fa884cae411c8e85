from __future__ import annotations
import re
from typing import List, Optional, Sequence
from .datatypes import KnownToken, UnknownToken, PhraseToken, PhraseModelEntry
from .phrase_model import PhraseModel

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9\s]")

def _lookahead(words: List[str], start: int, max_len: int) -> str:
    # every word is followed by a space so continuations match whole words only
    window = ""
    for w in words[start:]:
        window += w + " "
        if len(window) > max_len:
            break
    return window

def tokenize_phrase(phrase: str, model: PhraseModel, longest_first: bool = False) -> List[PhraseToken]:
    """
    Resolve a phrase into known multi-word phrases and single words.

    For each word the model's continuations are tried against the following
    words; the first one that matches is taken and its words are consumed.
    Continuations are tried in stored order unless ``longest_first`` is set,
    in which case longer continuations are tried first.
    A word without a matching continuation falls back to its single-word
    entry, or becomes an ``UnknownToken``.
    """
    words = _NON_ALNUM.sub("", phrase).lower().split()
    tokens: List[PhraseToken] = []
    i = 0
    while i < len(words):
        word = words[i]
        entries: Sequence[PhraseModelEntry] = model.candidates(word)
        if not entries:
            tokens.append(UnknownToken(text=word))
            i += 1
            continue

        max_len = max((len(e.continuation) for e in entries if e.continuation), default=0)
        window = _lookahead(words, i + 1, max_len) if max_len else ""
        if longest_first:
            entries = sorted(entries, key=lambda e: len(e.continuation or ""), reverse=True)

        single: Optional[PhraseModelEntry] = None
        match: Optional[PhraseModelEntry] = None
        for entry in entries:
            if entry.continuation is None:
                # the last standalone entry is the fallback
                single = entry
            elif window.startswith(entry.continuation + " "):
                match = entry
                break

        if match is not None:
            tokens.append(KnownToken(
                text=f"{word} {match.continuation}",
                specificity=match.specificity,
                continuation=match.continuation,
            ))
            i += 1 + len(match.continuation.split())
        elif single is not None:
            tokens.append(KnownToken(text=word, specificity=single.specificity))
            i += 1
        else:
            tokens.append(UnknownToken(text=word))
            i += 1
    return tokens

def tokens_specificity(tokens: Sequence[PhraseToken]) -> float:
    """Mean specificity of the scored known tokens; 0.0 if there are none."""
    scores = [t.specificity for t in tokens
              if isinstance(t, KnownToken) and t.specificity is not None]
    if not scores:
        return 0.0
    return sum(scores) / len(scores)

def phrase_specificity(phrase: str, model: PhraseModel) -> float:
    return tokens_specificity(tokenize_phrase(phrase, model))

def is_entity(tokens: Sequence[PhraseToken]) -> bool:
    # a recognised multi-word unit marks the phrase as a named entity
    return any(isinstance(t, KnownToken) and t.continuation for t in tokens)
