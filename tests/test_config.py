import io
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path

from quizrunner.config.config import load_config, validate_config


class ConfigTests(unittest.TestCase):
    def test_packaged_defaults(self) -> None:
        cfg = validate_config(load_config())
        self.assertEqual(cfg["questions"]["source"], "questions.json")
        self.assertEqual(cfg["questions"]["timeout_s"], 5.0)
        self.assertTrue(cfg["session"]["shuffle"])
        self.assertIsNone(cfg["session"]["seed"])
        self.assertEqual(cfg["ui"]["feedback_policy"], "immediate")

    def test_empty_config_gets_defaults(self) -> None:
        cfg = validate_config({})
        self.assertEqual(cfg["questions"]["source"], "questions.json")
        self.assertTrue(cfg["ui"]["show_breakdown"])

    def test_invalid_values_are_repaired_with_warning(self) -> None:
        raw = {
            "questions": {"source": 12, "timeout_s": -1},
            "session": {"shuffle": "yes", "seed": "abc"},
            "ui": {"feedback_policy": "shout", "show_progress": 0},
        }
        err = io.StringIO()
        with redirect_stderr(err):
            cfg = validate_config(raw)
        self.assertIsNone(cfg["questions"]["source"])
        self.assertEqual(cfg["questions"]["timeout_s"], 5.0)
        self.assertTrue(cfg["session"]["shuffle"])
        self.assertIsNone(cfg["session"]["seed"])
        self.assertEqual(cfg["ui"]["feedback_policy"], "immediate")
        self.assertTrue(cfg["ui"]["show_progress"])
        self.assertEqual(err.getvalue().count("WARNING:"), 6)

    def test_non_finite_timeout_is_repaired(self) -> None:
        for value in (float("inf"), float("nan")):
            with self.subTest(value=value):
                err = io.StringIO()
                with redirect_stderr(err):
                    cfg = validate_config({"questions": {"timeout_s": value}})
                self.assertEqual(cfg["questions"]["timeout_s"], 5.0)
                self.assertIn("timeout_s", err.getvalue())

    def test_non_finite_timeout_from_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "cfg.yml"
            p.write_text("questions:\n  timeout_s: .inf\n", encoding="utf-8")
            with redirect_stderr(io.StringIO()):
                cfg = validate_config(load_config(str(p)))
        self.assertEqual(cfg["questions"]["timeout_s"], 5.0)

    def test_user_file_and_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "cfg.yml"
            p.write_text("session:\n  seed: 7\n  shuffle: false\n", encoding="utf-8")
            cfg = validate_config(load_config(str(p)))
            self.assertEqual(cfg["session"]["seed"], 7)
            self.assertFalse(cfg["session"]["shuffle"])
            with redirect_stderr(io.StringIO()):
                with self.assertRaises(SystemExit):
                    load_config(str(Path(d) / "missing.yml"))


if __name__ == "__main__":
    unittest.main()
