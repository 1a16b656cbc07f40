import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "console"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "discovery"))
sys.path.insert(0, str(ROOT / "installers" / "bootstrap"))

from bepinex_app.cli import build_parser, select_application, select_release
from bepinex_app.prompts import Prompter
from bepinex_bootstrap.resolver import Release
from bepinex_core.errors import NotFoundError
from bepinex_discovery.models import Application


class _Script:
    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts: list[str] = []
        self.lines: list[str] = []

    def prompter(self) -> Prompter:
        return Prompter(input_fn=self._input, output_fn=self.lines.append)

    def _input(self, text: str) -> str:
        self.prompts.append(text)
        return self.answers.pop(0)


RELEASES = [
    Release(tag_name="v6.0.0-pre.2", name="6.0.0-pre.2", prerelease=True),
    Release(tag_name="v5.4.22", name="5.4.22", prerelease=False),
]


class CliTests(unittest.TestCase):
    def test_defaults_are_interactive(self):
        args = build_parser().parse_args([])
        self.assertIsNone(args.game)
        self.assertIsNone(args.tag)
        self.assertFalse(args.verbose)

    def test_flags(self):
        args = build_parser().parse_args(["--game", "Valheim", "--tag", "v5.4.22", "--repo", "a/b", "--verbose"])
        self.assertEqual(args.game, "Valheim")
        self.assertEqual(args.tag, "v5.4.22")
        self.assertEqual(args.repo, "a/b")
        self.assertTrue(args.verbose)

    def test_choose_retries_until_valid(self):
        script = _Script(["x", "9", "2"])
        apps = {
            "beta": Application("beta", Path("/b")),
            "Alpha": Application("Alpha", Path("/a")),
        }
        chosen = select_application(apps, script.prompter())
        self.assertEqual(chosen.name, "beta")
        self.assertEqual(script.lines[:3], ["Detected Unity games:", "1. Alpha", "2. beta"])
        self.assertEqual(len(script.prompts), 3)

    def test_choose_asks_again_on_non_ascii_digits(self):
        script = _Script(["²", "①", "1"])
        self.assertEqual(script.prompter().choose("Pick one:", ["a", "b"]), 0)
        self.assertEqual(len(script.prompts), 3)
        self.assertEqual(script.lines.count("Please enter a number between 1 and 2."), 2)

    def test_unknown_game_flag(self):
        with self.assertRaises(NotFoundError):
            select_application({}, Prompter(), game="Missing")

    def test_select_release_prompt(self):
        script = _Script([""])
        release = select_release(RELEASES, script.prompter())
        self.assertEqual(release.tag_name, "v6.0.0-pre.2")
        self.assertIn("1. v6.0.0-pre.2 (prerelease) - 6.0.0-pre.2", script.lines)
        self.assertIn("2. v5.4.22 - 5.4.22", script.lines)

    def test_select_release_from_flag_skips_prompt(self):
        script = _Script([])
        self.assertEqual(select_release(RELEASES, script.prompter(), tag="2").tag_name, "v5.4.22")
        self.assertEqual(script.prompts, [])


if __name__ == "__main__":
    unittest.main()
