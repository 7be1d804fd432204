import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from rationals.cli import build_progression, main, protect_negative_literals
from rationals.config import Settings, load_settings, settings_from_mapping
from rationals.integer_range import IntegerProgression, IntegerRange
from rationals.rational_range import RationalProgression, RationalRange


def run_cli(*argv):
    stdout = io.StringIO()
    stderr = io.StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        code = main(list(argv))
    return code, stdout.getvalue(), stderr.getvalue()


class CommandLineTests(unittest.TestCase):
    def test_demo_scenarios_all_hold(self):
        code, out, _ = run_cli("demo")
        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(len(lines), 12)
        self.assertTrue(all(line.endswith(": True") for line in lines))

    def test_calc(self):
        self.assertEqual(run_cli("calc", "1/2", "+", "1/3")[1], "5/6\n")
        self.assertEqual(run_cli("calc", "1/2", "/", "1/3")[1], "3/2\n")
        self.assertEqual(run_cli("calc", "-1/2", "*", "1/3")[1], "-1/6\n")
        self.assertEqual(run_cli("calc", "1/2", "cmp", "1/3")[1], "1\n")

    def test_calc_reports_errors(self):
        code, out, err = run_cli("calc", "1/0", "+", "1")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertTrue(err.startswith("Error: "))
        self.assertEqual(run_cli("calc", "1/2/3", "-", "1")[0], 1)

    def test_integer_progression(self):
        code, out, _ = run_cli("range", "1", "10", "--step", "3")
        self.assertEqual(code, 0)
        self.assertEqual(out, "1..10 step 3\n1, 4, 7, 10\n")

    def test_backward_progression_with_negative_step(self):
        _, out, _ = run_cli("range", "5", "1", "--step", "-2")
        self.assertEqual(out, "5 downTo 1 step 2\n5, 3, 1\n")

    def test_rational_range(self):
        _, out, _ = run_cli("range", "1/3", "2/3")
        self.assertEqual(out, "1/3..2/3 step 1/3\n1/3, 2/3\n")

    def test_terms_are_truncated(self):
        _, out, _ = run_cli("--max-terms", "3", "range", "1", "100")
        self.assertEqual(out, "1..100\n1, 2, 3, ...\n")

    def test_zero_step_is_an_error(self):
        code, _, err = run_cli("range", "1", "2", "--step", "0")
        self.assertEqual(code, 1)
        self.assertIn("Step must be non-zero.", err)

    def test_contains(self):
        self.assertEqual(run_cli("contains", "1/2", "1/3", "2/3")[1], "True\n")
        self.assertEqual(run_cli("contains", "8/9", "1/3", "4/7")[1], "False\n")

    def test_config_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "rationals.toml"
            path.write_text('[rationals]\nmax_terms = 2\nseparator = " "\n')
            _, out, _ = run_cli("--config", str(path), "range", "1", "10")
        self.assertEqual(out, "1..10\n1 2 ...\n")

    def test_missing_config_file(self):
        code, _, err = run_cli("--config", "/nonexistent/rationals.toml", "demo")
        self.assertEqual(code, 1)
        self.assertIn("Config file not found", err)

    def test_negative_literals_are_protected(self):
        self.assertEqual(
            protect_negative_literals(["calc", "-1/2", "-", "-3", "--step"]),
            ["calc", " -1/2", "-", "-3", "--step"],
        )

    def test_negative_integers_reach_argparse_unchanged(self):
        self.assertEqual(run_cli("calc", "-3", "+", "1/2")[1], "-5/2\n")
        _, out, _ = run_cli("range", "1", "0", "--step", "-1/2")
        self.assertEqual(out, "1 downTo 0 step 1/2\n1, 1/2, 0\n")

    def test_negative_option_value_is_reported_verbatim(self):
        code, _, err = run_cli("--max-terms", "-3", "range", "1", "2")
        self.assertEqual(code, 1)
        self.assertEqual(err, "Error: max_terms must be >= 1\n")

    def test_build_progression_picks_the_domain(self):
        self.assertIsInstance(build_progression("1", "4", None), IntegerRange)
        self.assertIsInstance(build_progression("1", "4", "2"), IntegerProgression)
        self.assertIsInstance(build_progression("1", "4/3", None), RationalRange)
        self.assertIsInstance(build_progression("1", "4", "1/2"), RationalProgression)


class SettingsTests(unittest.TestCase):
    def test_defaults(self):
        settings = load_settings(None)
        self.assertEqual(settings, Settings(max_terms=20, separator=", ", verbose=False))

    def test_override_skips_none(self):
        settings = Settings().override(max_terms=5, verbose=None)
        self.assertEqual(settings.max_terms, 5)
        self.assertFalse(settings.verbose)

    def test_unknown_keys_are_rejected(self):
        with self.assertRaises(ValueError):
            settings_from_mapping({"max_terms": 3, "colour": "red"})

    def test_invalid_values_are_rejected(self):
        with self.assertRaises(ValueError):
            Settings(max_terms=0)
        with self.assertRaises(ValueError):
            Settings(verbose="yes")

    def test_load_from_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "settings.toml"
            path.write_text("[rationals]\nverbose = true\n")
            settings = load_settings(path)
        self.assertTrue(settings.verbose)
        self.assertEqual(settings.max_terms, 20)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
