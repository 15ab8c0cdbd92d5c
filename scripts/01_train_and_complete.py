from __future__ import annotations

from ngram_lm import LanguageModel
from ngram_lm.datasets import count_summary, prepare_corpus


def main() -> None:
    raw = [
        "the cat sat on the mat",
        "the dog sat on the log",
        "a cat saw the dog",
    ]
    corpus = prepare_corpus(raw)

    lm = LanguageModel.from_lines(corpus, max_order=3, seed=42)

    print("CORPUS:", corpus)
    print("VOCAB:", list(lm.vocabulary))
    print(count_summary(lm.counts).to_string())
    for history in (["<s>"], ["<s>", "the"], ["on", "the"]):
        print(" ".join(history), "->", lm.random_completion(history))


if __name__ == "__main__":
    main()
