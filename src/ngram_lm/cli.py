#!/usr/bin/env python3
"""
N-gram Language Model command line.

Trains a model from a plaintext corpus and prints random completions.

Usage:
    ngram-lm corpus.txt 3 --history "<s> the"              # One completion
    ngram-lm corpus.txt 3 --vocab vocab.txt --counts c.txt  # Write dumps
    ngram-lm corpus.txt 3 --interactive                     # Read histories from stdin
    ngram-lm raw.txt 2 --raw --stats                        # Add markers, show counts
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .config import LMConfig, load_config
from .datasets import count_summary, load_corpus, prepare_corpus
from .model import LanguageModel
from .text_cleaning import CleanTextConfig
from .tokenization import split_line

logger = logging.getLogger(__name__)


def run_histories(lm: LanguageModel, histories: List[str], order: Optional[int]) -> None:
    """Print one completion line per history string."""
    for history in histories:
        print(lm.random_completion(split_line(history), order))


def run_interactive(lm: LanguageModel, order: Optional[int]) -> None:
    """
    Read histories from stdin and print a completion for each.

    Commands:
        /order <n>  - change the sampling order
        /quit       - exit
    """
    print("Enter a history (tokens separated by spaces), /order <n> or /quit.")

    while True:
        try:
            user_input = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not user_input:
            continue

        if user_input == "/quit":
            break

        if user_input.startswith("/order "):
            value = user_input[7:].strip()
            if value.isdigit() and int(value) >= 1:
                order = int(value)
                print(f"Order set to: {order}")
            else:
                print("Order must be a positive integer")
            continue

        print(lm.random_completion(split_line(user_input), order))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ngram-lm",
        description="Train a maximum-likelihood n-gram model and generate random completions",
    )

    parser.add_argument("text", help="Training corpus, one sentence per line")
    parser.add_argument("max_order", type=int, help="Maximum n-gram order to count")

    parser.add_argument(
        "--order", "-n",
        type=int,
        help="Order used for sampling (default: max_order)",
    )
    parser.add_argument("--seed", "-s", type=int, help="Random seed")
    parser.add_argument("--vocab", help="Write the vocabulary to this file")
    parser.add_argument("--counts", help="Write the n-gram counts to this file")
    parser.add_argument(
        "--history",
        action="append",
        default=[],
        help="History to complete, e.g. \"<s> the\" (repeatable)",
    )
    parser.add_argument(
        "--interactive", "-i",
        action="store_true",
        help="Read histories from stdin",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Corpus is raw text: normalize whitespace and add sentence markers",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print n-gram type and token counts per order",
    )
    parser.add_argument(
        "--max-length",
        type=int,
        help="Stop a completion after this many tokens",
    )
    parser.add_argument("--config", "-c", help="Path to configuration JSON file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    return parser


def make_config(args: argparse.Namespace) -> LMConfig:
    """Merge the optional JSON config with command-line arguments."""
    config = load_config(args.config) if args.config else LMConfig()

    overrides = {"max_order": args.max_order}
    for name, value in (
        ("order", args.order),
        ("seed", args.seed),
        ("vocab_path", args.vocab),
        ("counts_path", args.counts),
        ("max_length", args.max_length),
    ):
        if value is not None:
            overrides[name] = value

    return replace(config, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = make_config(args)
        lines = load_corpus(args.text)
        if args.raw:
            lines = prepare_corpus(
                lines,
                CleanTextConfig(
                    lowercase=config.lowercase,
                    start_token=config.start_token,
                    end_token=config.end_token,
                ),
            )
        lm = LanguageModel.from_lines(lines, config=config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.stats:
        print(count_summary(lm.counts).to_string())

    order = config.order
    if args.history:
        run_histories(lm, args.history, order)
    if args.interactive:
        run_interactive(lm, order)

    return 0


if __name__ == "__main__":
    sys.exit(main())
