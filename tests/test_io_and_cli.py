"""
Tests for corpus I/O, text preparation and the command line.
"""

import io
import json
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ngram_lm.cli import main
from ngram_lm.config import load_config
from ngram_lm.counting import extract_counts
from ngram_lm.datasets import (
    count_summary,
    format_completion,
    load_corpus,
    prepare_corpus,
    write_counts,
    write_vocabulary,
)
from ngram_lm.text_cleaning import CleanTextConfig, clean_text, prepare_sentence


CORPUS_TEXT = "<s> the cat sat </s>\n<s> the dog sat </s>\n<s> a cat ran </s>\n"


class TempDirTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()


class TestTextCleaning(unittest.TestCase):
    """Tests for raw text preparation."""

    def test_whitespace_normalized(self):
        self.assertEqual(clean_text("  The  cat\tsat \n"), "The cat sat")

    def test_prepare_sentence_adds_markers(self):
        self.assertEqual(prepare_sentence("The cat sat"), "<s> The cat sat </s>")

    def test_lowercase_and_accents(self):
        cfg = CleanTextConfig(lowercase=True, strip_accents=True)
        self.assertEqual(prepare_sentence("Café Noir", cfg), "<s> cafe noir </s>")

    def test_custom_markers(self):
        cfg = CleanTextConfig(start_token="BOS", end_token="EOS")
        self.assertEqual(prepare_sentence("hi", cfg), "BOS hi EOS")

    def test_empty_sentence(self):
        self.assertEqual(prepare_sentence("   "), "")
        self.assertEqual(prepare_corpus(["a b", "", "  "]), ["<s> a b </s>"])


class TestDatasets(TempDirTestCase):
    """Tests for corpus loading and dumps."""

    def test_load_corpus(self):
        path = self.tmp / "corpus.txt"
        path.write_text(CORPUS_TEXT, encoding="utf-8")
        lines = load_corpus(path)
        self.assertEqual(len(lines), 3)
        self.assertEqual(lines[0], "<s> the cat sat </s>")

    def test_load_missing_corpus(self):
        with self.assertRaises(FileNotFoundError):
            load_corpus(self.tmp / "missing.txt")

    def test_write_vocabulary(self):
        path = self.tmp / "vocab.txt"
        write_vocabulary(["<s>", "a", "b", "</s>"], path)
        self.assertEqual(path.read_text(encoding="utf-8"), "<s>\na\nb\n</s>\n")

    def test_write_counts(self):
        counts = extract_counts(["<s> a b </s>"], 2)
        path = self.tmp / "counts.txt"
        write_counts(counts.ngram_counts, path)

        lines = path.read_text(encoding="utf-8").splitlines()
        self.assertEqual(sorted(lines), ["<s> a\t1", "a b\t1", "b </s>\t1"])

    def test_count_summary(self):
        counts = extract_counts(["<s> a b </s>"], 3)
        summary = count_summary(counts)

        self.assertEqual(list(summary.index), [1, 2, 3])
        self.assertEqual(summary.loc[1, "types"], 4)
        self.assertEqual(summary.loc[2, "types"], 3)
        self.assertEqual(summary.loc[3, "types"], 2)
        self.assertEqual(summary.loc[2, "tokens"], 3)

    def test_count_summary_fills_missing_orders(self):
        counts = extract_counts(["<s> a </s>"], 4)
        summary = count_summary(counts)
        self.assertEqual(summary.loc[4, "types"], 0)
        self.assertEqual(summary.loc[4, "tokens"], 0)

    def test_format_completion(self):
        self.assertEqual(format_completion(["a", "</s>"]), " a </s>")
        self.assertEqual(format_completion([]), "")


class TestConfigFile(TempDirTestCase):

    def test_load_config(self):
        path = self.tmp / "config.json"
        path.write_text(json.dumps({"max_order": 2, "seed": 11}), encoding="utf-8")
        config = load_config(path)
        self.assertEqual(config.max_order, 2)
        self.assertEqual(config.seed, 11)

    def test_config_must_be_object(self):
        path = self.tmp / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_config(path)


class TestCLI(TempDirTestCase):
    """Tests for the command line entry point."""

    def setUp(self):
        super().setUp()
        self.corpus = self.tmp / "corpus.txt"
        self.corpus.write_text(CORPUS_TEXT, encoding="utf-8")

    def run_main(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = main([str(a) for a in argv])
        return status, out.getvalue(), err.getvalue()

    def test_history_completion(self):
        status, out, _ = self.run_main(self.corpus, 3, "--seed", 4, "--history", "<s> the")
        self.assertEqual(status, 0)
        line = out.splitlines()[-1]
        self.assertTrue(line.startswith(" "))
        self.assertIn(line.split(" ")[-1], {"</s>", "<fail>"})

    def test_dumps(self):
        vocab = self.tmp / "vocab.txt"
        counts = self.tmp / "counts.txt"
        status, _, _ = self.run_main(self.corpus, 2, "--vocab", vocab, "--counts", counts)

        self.assertEqual(status, 0)
        self.assertEqual(
            vocab.read_text(encoding="utf-8").splitlines(),
            ["<s>", "the", "cat", "sat", "</s>", "dog", "a", "ran"],
        )
        self.assertIn("<s> the\t2", counts.read_text(encoding="utf-8").splitlines())

    def test_raw_corpus_and_stats(self):
        raw = self.tmp / "raw.txt"
        raw.write_text("the cat sat\n\nthe dog sat\n", encoding="utf-8")
        status, out, _ = self.run_main(raw, 2, "--raw", "--stats")

        self.assertEqual(status, 0)
        self.assertIn("types", out)
        self.assertIn("tokens", out)

    def test_interactive(self):
        inputs = ["<s> the", "/order 2", "/order x", "", "/quit"]
        with patch("builtins.input", side_effect=inputs):
            status, out, _ = self.run_main(self.corpus, 3, "--seed", 2, "--interactive")

        self.assertEqual(status, 0)
        self.assertIn("Order set to: 2", out)
        self.assertIn("Order must be a positive integer", out)

    def test_interactive_end_of_input(self):
        with patch("builtins.input", side_effect=EOFError):
            status, _, _ = self.run_main(self.corpus, 2, "--interactive")
        self.assertEqual(status, 0)

    def test_missing_corpus(self):
        status, _, err = self.run_main(self.tmp / "missing.txt", 2)
        self.assertEqual(status, 1)
        self.assertIn("Error", err)

    def test_invalid_order(self):
        status, _, err = self.run_main(self.corpus, 0)
        self.assertEqual(status, 1)
        self.assertIn("max_order", err)


if __name__ == '__main__':
    unittest.main()
