from dataclasses import dataclass, fields
from typing import Any, Mapping

# --- Ranking constants ---

# Random-walk damping factor for sentence centrality.
DAMPING = 0.85
# Iteration stops once the L1 change of all scores falls below this.
TOLERANCE = 1e-6
# Hard cap on centrality iterations, keeps runs deterministic.
MAX_ITERATIONS = 100
# Added to the keyphrase equal to the heavy-weight query.
QUERY_BONUS = 5000


@dataclass
class DseekConfig:
    max_words: int = 5
    min_words: int = 2
    min_word_length: int = 3
    top_keyphrases_percent: float = 0.2
    limit_top_sentences: int = 5
    limit_top_keyphrases: int = 10
    min_keyphrase_length: int = 5
    heavy_weight_query: str = ""
    allow_inner_verbs: bool = False
    longest_match_first: bool = False

    _ALIASES = {
        "maxWords": "max_words",
        "minWords": "min_words",
        "minWordLength": "min_word_length",
        "topKeyphrasesPercent": "top_keyphrases_percent",
        "limitTopSentences": "limit_top_sentences",
        "limitTopKeyphrases": "limit_top_keyphrases",
        "minKeyPhraseLength": "min_keyphrase_length",
        "heavyWeightQuery": "heavy_weight_query",
        "allowInnerVerbs": "allow_inner_verbs",
        "longestMatchFirst": "longest_match_first",
    }

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "DseekConfig":
        """Build a config from an option bag with camelCase or snake_case keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in options.items():
            name = cls._ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown option: {key}")
            kwargs[name] = value
        cfg = cls(**kwargs)
        cfg.validate()
        return cfg

    def validate(self) -> "DseekConfig":
        if self.min_words < 1:
            raise ValueError(f"min_words must be >= 1, got {self.min_words}")
        if self.max_words < self.min_words:
            raise ValueError(
                f"max_words ({self.max_words}) must be >= min_words ({self.min_words})"
            )
        if self.top_keyphrases_percent < 0:
            raise ValueError("top_keyphrases_percent must be non-negative")
        for name in ("min_word_length", "limit_top_sentences",
                     "limit_top_keyphrases", "min_keyphrase_length"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if not isinstance(self.heavy_weight_query, str):
            raise ValueError("heavy_weight_query must be a string")
        return self
