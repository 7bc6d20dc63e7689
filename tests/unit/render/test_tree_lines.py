"""Tree renderer output tests.

Exact guide-line output for small trees, decoration markers, and the cursor
span the interactive screen relies on.
"""

from __future__ import annotations

import unittest
from pathlib import Path

from itree.navigation import FoldState, NavEvent, Navigator
from itree.render import LineStyle, StyleSpan, render_text, render_tree
from itree.tree_model import WalkEntry, build_tree


def _scenario_tree():
    return build_tree(
        "proj",
        [
            WalkEntry(Path("proj/dirA"), True),
            WalkEntry(Path("proj/dirA/f1"), False),
            WalkEntry(Path("proj/dirA/f2"), False),
            WalkEntry(Path("proj/dirB"), True),
        ],
    )


def _texts(lines) -> list[str]:
    return [line.text for line in lines]


class RenderTreeTests(unittest.TestCase):
    def test_folded_scenario_then_toggle_shows_children(self) -> None:
        tree = _scenario_tree()
        nav = Navigator(tree, fold_depth=1)

        self.assertEqual(
            _texts(render_tree(tree, nav.fold_state)),
            ["proj", "├── dirA/*", "└── dirB/"],
        )

        nav.handle(NavEvent.TOGGLE_FOLD)

        self.assertEqual(
            _texts(render_tree(tree, nav.fold_state)),
            ["proj", "├── dirA/", "│   ├── f1", "│   └── f2", "└── dirB/"],
        )

    def test_last_child_subtree_uses_blank_indent(self) -> None:
        tree = build_tree(
            ".",
            [
                WalkEntry(Path("a.txt"), False),
                WalkEntry(Path("z"), True),
                WalkEntry(Path("z/y"), True),
                WalkEntry(Path("z/y/x.txt"), False),
            ],
        )

        self.assertEqual(
            _texts(render_tree(tree, FoldState(tree))),
            [".", "├── z/", "│   └── y/", "│       └── x.txt", "└── a.txt"],
        )

    def test_render_is_deterministic(self) -> None:
        tree = _scenario_tree()
        state = FoldState.initial(tree, 1)

        self.assertEqual(render_tree(tree, state, 1), render_tree(tree, state, 1))

    def test_lines_follow_visible_sequence(self) -> None:
        tree = _scenario_tree()
        nav = Navigator(tree, fold_depth=1)

        self.assertEqual([line.node_id for line in render_tree(tree, nav.fold_state)], list(nav.visible))

    def test_cursor_line_gets_cursor_span_over_name(self) -> None:
        tree = _scenario_tree()
        dir_a = tree.find("dirA")
        lines = render_tree(tree, FoldState.initial(tree, 1), dir_a)

        cursor_lines = [line for line in lines if line.is_cursor]
        self.assertEqual(len(cursor_lines), 1)
        line = cursor_lines[0]
        self.assertEqual(line.node_id, dir_a)
        self.assertIn(StyleSpan(4, 10, LineStyle.CURSOR), line.spans)
        self.assertIn(StyleSpan(0, 4, LineStyle.GUIDE), line.spans)
        self.assertIn(StyleSpan(4, 9, LineStyle.DIRECTORY), line.spans)
        self.assertIn(StyleSpan(9, 10, LineStyle.FOLD_MARK), line.spans)

    def test_no_cursor_means_no_highlight(self) -> None:
        tree = _scenario_tree()

        lines = render_tree(tree, FoldState(tree))

        self.assertFalse(any(line.is_cursor for line in lines))
        self.assertFalse(
            any(span.style is LineStyle.CURSOR for line in lines for span in line.spans)
        )

    def test_symlink_and_unreadable_markers(self) -> None:
        tree = build_tree(
            "proj",
            [
                WalkEntry(Path("proj/locked"), True, unreadable=True),
                WalkEntry(Path("proj/shared"), True, True, "data"),
                WalkEntry(Path("proj/latest"), False, True, "v2.txt"),
            ],
        )

        self.assertEqual(
            _texts(render_tree(tree, FoldState(tree))),
            [
                "proj",
                "├── locked/ [error opening dir]",
                "├── shared/ -> data",
                "└── latest -> v2.txt",
            ],
        )

    def test_render_text_appends_summary(self) -> None:
        tree = _scenario_tree()

        text = render_text(tree, FoldState(tree))

        self.assertEqual(
            text,
            "proj\n├── dirA/\n│   ├── f1\n│   └── f2\n└── dirB/\n\n2 directories, 2 files\n",
        )
        self.assertEqual(render_text(tree, FoldState(tree), summary=False).splitlines()[-1], "└── dirB/")


if __name__ == "__main__":
    unittest.main()
