"""CLI argument, default-path, and mode-selection tests.

Verifies how ``itree.cli.main`` turns flags and config defaults into
``BrowserOptions`` before handing off to the runtime.
"""

from __future__ import annotations

import logging
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from itree import cli
from itree.errors import MalformedWalkOrder
from itree.runtime.app import MODE_INTERACTIVE, MODE_PRINT, MODE_QUIET


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        defaults = mock.patch("itree.cli.load_defaults", return_value={})
        self.load_defaults = defaults.start()
        self.addCleanup(defaults.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _main(self, *argv: str, default_path: Path | None = None):
        with mock.patch.object(sys, "argv", ["itree", *argv]), mock.patch("itree.cli.run_browser") as run_browser:
            cli.main(default_path=default_path)
        run_browser.assert_called_once()
        return run_browser.call_args.args

    def test_main_defaults_to_current_working_directory_when_no_path_arg(self) -> None:
        previous_cwd = Path.cwd()
        try:
            os.chdir(self.root)
            path, options = self._main()
        finally:
            os.chdir(previous_cwd)

        self.assertEqual(path.resolve(), self.root)
        self.assertEqual(options.mode, MODE_INTERACTIVE)
        self.assertIsNone(options.fold_depth)
        self.assertTrue(options.dirs_first)
        self.assertTrue(options.walk.respect_ignore)
        self.assertTrue(options.walk.respect_git_exclude)

    def test_explicit_path_wins_over_default(self) -> None:
        target = self.root / "sub"
        target.mkdir()

        path, _options = self._main(str(target), default_path=self.root / "unused")

        self.assertEqual(path, target)

    def test_mode_flags(self) -> None:
        _path, options = self._main(str(self.root), "--no-interact")
        self.assertEqual(options.mode, MODE_PRINT)
        _path, options = self._main(str(self.root), "-q")
        self.assertEqual(options.mode, MODE_QUIET)

    def test_quiet_and_no_interact_are_mutually_exclusive(self) -> None:
        with mock.patch.object(sys, "argv", ["itree", "-q", "--no-interact"]), mock.patch(
            "sys.stderr"
        ), self.assertRaises(SystemExit):
            cli.main(default_path=self.root)

    def test_walk_and_display_flags_map_to_options(self) -> None:
        _path, options = self._main(
            str(self.root),
            "--only-dirs",
            "-L",
            "3",
            "-l",
            "--max-filesize",
            "1024",
            "--hidden",
            "--no-ignore",
            "--no-exclude",
            "-I",
            "*.pyc",
            "--ignore",
            "build",
            "--ignore-case",
            "--fold-depth",
            "1",
            "--files-first",
            "--case-sensitive",
            "--theme",
            "ocean",
            "--no-color",
            "-c",
            "light-blue",
            "-f",
            "red",
            "--focus",
            "src",
        )

        walk = options.walk
        self.assertTrue(walk.only_dirs)
        self.assertEqual(walk.max_depth, 3)
        self.assertTrue(walk.follow_links)
        self.assertEqual(walk.max_filesize, 1024)
        self.assertTrue(walk.show_hidden)
        self.assertFalse(walk.respect_ignore)
        self.assertFalse(walk.respect_git_exclude)
        self.assertEqual(walk.ignore_patterns, ("*.pyc", "build"))
        self.assertTrue(walk.ignore_case)
        self.assertEqual(options.fold_depth, 1)
        self.assertFalse(options.dirs_first)
        self.assertTrue(options.case_sensitive)
        self.assertEqual(options.theme, "ocean")
        self.assertTrue(options.no_color)
        self.assertEqual(options.bg_color, "brightblue")
        self.assertEqual(options.fg_color, "red")
        self.assertEqual(options.focus, "src")

    def test_config_defaults_are_overridden_by_flags(self) -> None:
        self.load_defaults.return_value = {"fold_depth": 2, "show_hidden": True, "dirs_first": False}

        _path, options = self._main(str(self.root))
        self.assertEqual(options.fold_depth, 2)
        self.assertTrue(options.walk.show_hidden)
        self.assertFalse(options.dirs_first)

        _path, options = self._main(str(self.root), "--fold-depth", "0")
        self.assertEqual(options.fold_depth, 0)

    def test_invalid_numbers_and_colors_are_rejected(self) -> None:
        for argv in (["-L", "0"], ["--fold-depth", "-1"], ["--max-filesize", "big"], ["-f", "mauve"]):
            with mock.patch.object(sys, "argv", ["itree", str(self.root), *argv]), mock.patch(
                "sys.stderr"
            ), mock.patch("itree.cli.run_browser") as run_browser:
                with self.assertRaises(SystemExit):
                    cli.main()
            run_browser.assert_not_called()

    def test_missing_path_and_file_path_exit(self) -> None:
        (self.root / "file.txt").write_text("x", encoding="utf-8")
        for target in (self.root / "missing", self.root / "file.txt"):
            with mock.patch.object(sys, "argv", ["itree", str(target)]), mock.patch(
                "itree.cli.run_browser"
            ) as run_browser:
                with self.assertRaises(SystemExit):
                    cli.main()
            run_browser.assert_not_called()

    def test_tree_build_error_becomes_system_exit(self) -> None:
        with mock.patch.object(sys, "argv", ["itree", str(self.root)]), mock.patch(
            "itree.cli.run_browser",
            side_effect=MalformedWalkOrder("proj/a/b"),
        ):
            with self.assertRaises(SystemExit) as ctx:
                cli.main()

        self.assertIn("proj/a/b", str(ctx.exception.code))


class ConfigureLoggingTests(unittest.TestCase):
    def test_without_log_file_no_handlers_are_added(self) -> None:
        with mock.patch("itree.cli.logging.basicConfig") as basic_config:
            cli.configure_logging(None, verbose=True)

        basic_config.assert_not_called()

    def test_log_file_and_verbose_select_debug_level(self) -> None:
        with mock.patch("itree.cli.logging.basicConfig") as basic_config:
            cli.configure_logging(Path("/tmp/itree.log"), verbose=True)

        kwargs = basic_config.call_args.kwargs
        self.assertEqual(kwargs["filename"], "/tmp/itree.log")
        self.assertEqual(kwargs["level"], logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
