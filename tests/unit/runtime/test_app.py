"""Browser bootstrap tests: mode selection, focus, and error ordering."""

from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from itree.errors import MalformedWalkOrder
from itree.runtime.app import (
    MODE_PRINT,
    MODE_QUIET,
    BrowserOptions,
    load_tree,
    resolve_focus,
    run_browser,
)
from itree.tree_model import WalkEntry
from itree.walker import WalkOptions

NO_GIT = WalkOptions(respect_ignore=False, respect_git_exclude=False)


class _Stdout(io.StringIO):
    def fileno(self) -> int:
        return 1


class RunBrowserTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name) / "proj"
        (self.root / "src").mkdir(parents=True)
        (self.root / "src" / "main.py").write_text("print()\n", encoding="utf-8")
        (self.root / "README").write_text("hi\n", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, options: BrowserOptions, *, tty: bool = False) -> str:
        stdout = _Stdout()
        with mock.patch("itree.runtime.app.sys.stdout", stdout), mock.patch(
            "itree.runtime.app.sys.stdin"
        ), mock.patch("itree.runtime.app.os.isatty", return_value=tty), mock.patch(
            "itree.runtime.app.run_main_loop"
        ) as run_loop:
            run_browser(self.root, options)
        self.run_loop = run_loop
        return stdout.getvalue()

    def test_print_mode_writes_full_tree_and_summary(self) -> None:
        out = self._run(BrowserOptions(walk=NO_GIT, mode=MODE_PRINT, fold_depth=1))

        self.assertEqual(
            out,
            f"{self.root}\n├── src/\n│   └── main.py\n└── README\n\n1 directory, 2 files\n",
        )
        self.run_loop.assert_not_called()

    def test_quiet_mode_writes_summary_only(self) -> None:
        out = self._run(BrowserOptions(walk=NO_GIT, mode=MODE_QUIET))

        self.assertEqual(out, "1 directory, 2 files\n")

    def test_interactive_mode_without_tty_falls_back_to_print(self) -> None:
        out = self._run(BrowserOptions(walk=NO_GIT), tty=False)

        self.assertTrue(out.endswith("1 directory, 2 files\n"))
        self.run_loop.assert_not_called()

    def test_interactive_mode_on_tty_starts_loop_with_focus(self) -> None:
        with mock.patch("itree.runtime.app.TerminalController") as controller:
            out = self._run(BrowserOptions(walk=NO_GIT, fold_depth=1, focus="src/main.py"), tty=True)

        self.assertEqual(out, "")
        controller.assert_called_once()
        self.run_loop.assert_called_once()
        navigator = self.run_loop.call_args.args[0]
        self.assertEqual(navigator.cursor, navigator.tree.find("src/main.py"))
        self.assertFalse(navigator.fold_state.is_collapsed(navigator.tree.find("src")))

    def test_unknown_focus_exits(self) -> None:
        with self.assertRaises(SystemExit):
            self._run(BrowserOptions(walk=NO_GIT, focus="nope"))

    def test_construction_error_propagates_before_output(self) -> None:
        bad = [WalkEntry(self.root / "a" / "b", False)]
        stdout = io.StringIO()

        with mock.patch("itree.runtime.app.walk", return_value=iter(bad)), mock.patch(
            "itree.runtime.app.sys.stdout", stdout
        ), mock.patch("itree.runtime.app.run_main_loop") as run_loop:
            with self.assertRaises(MalformedWalkOrder):
                run_browser(self.root, BrowserOptions(mode=MODE_PRINT))

        run_loop.assert_not_called()
        self.assertEqual(stdout.getvalue(), "")

    def test_resolve_focus_accepts_absolute_paths(self) -> None:
        tree = load_tree(self.root, BrowserOptions(walk=NO_GIT))

        self.assertEqual(
            resolve_focus(tree, self.root, str(self.root.absolute() / "src")),
            tree.find("src"),
        )
        self.assertEqual(resolve_focus(tree, self.root, str(self.root.absolute())), tree.root_id)
        self.assertIsNone(resolve_focus(tree, self.root, "/definitely/elsewhere"))

    def test_unknown_mode_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            run_browser(self.root, BrowserOptions(walk=NO_GIT, mode="fancy"))


if __name__ == "__main__":
    unittest.main()
