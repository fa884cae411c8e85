"""
Phrase Model: a read-only table of word prefixes -> phrase continuations.

JSON layout::

    { "<two-letter prefix>": { "<word>": [ {"n": "<continuation>", "u": <specificity>}, ... ] } }

An entry without ``n`` stands for the word on its own. The model is loaded
once per process and shared by every pipeline call; nothing mutates it after
construction.
"""
from __future__ import annotations
import json
import math
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Tuple, Union

from .datatypes import PhraseModelEntry

logger = logging.getLogger(__name__)

DEFAULT_MODEL_PATH = Path(__file__).parent / "data" / "sample-phrase-model.json"


class PhraseModelError(ValueError):
    """Raised when a phrase model does not have the expected shape."""


def _convert_entry(word: str, raw: Any) -> PhraseModelEntry:
    if not isinstance(raw, Mapping):
        raise PhraseModelError(f"entry for {word!r} must be an object, got {type(raw).__name__}")
    cont = raw.get("n")
    score = raw.get("u")
    if cont is not None and not isinstance(cont, str):
        raise PhraseModelError(f"continuation for {word!r} must be a string")
    if score is not None:
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise PhraseModelError(f"specificity for {word!r} must be a number")
        score = float(score)
        if score < 0 or not math.isfinite(score):
            raise PhraseModelError(f"specificity for {word!r} must be a finite non-negative number")
    if cont is not None:
        cont = " ".join(cont.lower().split()) or None
    return PhraseModelEntry(continuation=cont, specificity=score)


class PhraseModel:
    def __init__(self, table: Mapping[str, Mapping[str, Tuple[PhraseModelEntry, ...]]]):
        self._table = MappingProxyType(
            {prefix: MappingProxyType(dict(words)) for prefix, words in table.items()}
        )

    @classmethod
    def empty(cls) -> "PhraseModel":
        return cls({})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PhraseModel":
        if not isinstance(data, Mapping):
            raise PhraseModelError("phrase model must be a JSON object")
        table = {}
        for prefix, words in data.items():
            if not isinstance(words, Mapping):
                raise PhraseModelError(f"prefix {prefix!r} must map to an object")
            converted = {}
            for word, entries in words.items():
                if not isinstance(entries, list):
                    raise PhraseModelError(f"word {word!r} must map to a list")
                converted[word] = tuple(_convert_entry(word, e) for e in entries)
            table[prefix] = converted
        return cls(table)

    @classmethod
    def from_string(cls, text: str) -> "PhraseModel":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise PhraseModelError(f"phrase model is not valid JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "PhraseModel":
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise PhraseModelError(f"phrase model {path} is not UTF-8: {e}") from e
        model = cls.from_string(text)
        logger.info("Loaded phrase model from %s (%d words)", path, len(model))
        return model

    def candidates(self, word: str) -> Tuple[PhraseModelEntry, ...]:
        """Entries for ``word`` in stored order, or an empty tuple."""
        words = self._table.get(word[:2])
        if words is None:
            return ()
        return words.get(word, ())

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and bool(self.candidates(word))

    def __len__(self) -> int:
        return sum(len(words) for words in self._table.values())


@lru_cache(maxsize=1)
def load_default_model() -> PhraseModel:
    return PhraseModel.from_json(DEFAULT_MODEL_PATH)
