from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import DseekConfig
from .phrase_model import PhraseModel, PhraseModelError, load_default_model
from .summarize import weight_keyphrases_sentences, generate_summary


def build_parser() -> argparse.ArgumentParser:
    defaults = DseekConfig()
    parser = argparse.ArgumentParser(prog="dseek",
                                     description="Rank keyphrases and sentences of a document.")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--input", type=str, help="Path to a text file.")
    group.add_argument("--text", type=str, help="Raw text (quote the string).")
    parser.add_argument("--model", type=str, default=None,
                        help="Phrase model JSON. Default: bundled sample model.")
    parser.add_argument("--query", type=str, default="", help="Keyphrase to bias ranking towards.")
    parser.add_argument("--max-words", type=int, default=defaults.max_words)
    parser.add_argument("--min-words", type=int, default=defaults.min_words)
    parser.add_argument("--min-word-length", type=int, default=defaults.min_word_length)
    parser.add_argument("--top-percent", type=float, default=defaults.top_keyphrases_percent,
                        help="Fraction of folded keyphrases scored for specificity.")
    parser.add_argument("--sentences", type=int, default=defaults.limit_top_sentences,
                        help="Max sentences returned.")
    parser.add_argument("--keyphrases", type=int, default=defaults.limit_top_keyphrases,
                        help="Max keyphrases returned.")
    parser.add_argument("--min-keyphrase-length", type=int, default=defaults.min_keyphrase_length)
    parser.add_argument("--longest-match", action="store_true",
                        help="Prefer the longest phrase model continuation.")
    parser.add_argument("--summary", action="store_true",
                        help="Print the top sentences as plain text instead of JSON.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline details.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(format="%(asctime)s %(levelname)s:%(name)s:%(message)s",
                        level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.input:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            parser.error(f"cannot read '{args.input}': {e}")
    else:
        text = args.text

    try:
        model = PhraseModel.from_json(args.model) if args.model else load_default_model()
    except (OSError, PhraseModelError) as e:
        parser.error(f"cannot load phrase model: {e}")

    try:
        cfg = DseekConfig(
            max_words=args.max_words,
            min_words=args.min_words,
            min_word_length=args.min_word_length,
            top_keyphrases_percent=args.top_percent,
            limit_top_sentences=args.sentences,
            limit_top_keyphrases=args.keyphrases,
            min_keyphrase_length=args.min_keyphrase_length,
            heavy_weight_query=args.query,
            longest_match_first=args.longest_match,
        ).validate()
    except ValueError as e:
        parser.error(str(e))

    result = weight_keyphrases_sentences(text, config=cfg, model=model)
    if args.summary:
        print(generate_summary(result))
    else:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
