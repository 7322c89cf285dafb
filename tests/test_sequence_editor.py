"""
Tests for the rebase sequence editor.
"""

import os
import subprocess
import sys

from git_smart.sequence_editor import move_first_line_to_end, rewrite_todo_file


TODO = (
    "pick 1111111 First\n"
    "pick 2222222 Second\n"
    "pick 3333333 Third\n"
    "\n"
    "# Rebase 0000000..3333333 onto 0000000 (3 commands)\n"
    "#\n"
)


class TestMoveFirstLineToEnd:
    """Test the line reordering."""

    def test_moves_first_before_blank_separator(self):
        lines = TODO.splitlines(keepends=True)
        result = move_first_line_to_end(lines)
        assert result == [
            "pick 2222222 Second\n",
            "pick 3333333 Third\n",
            "pick 1111111 First\n",
            "\n",
            "# Rebase 0000000..3333333 onto 0000000 (3 commands)\n",
            "#\n",
        ]

    def test_two_instructions_swap(self):
        lines = ["pick a\n", "pick b\n", "\n"]
        assert move_first_line_to_end(lines) == ["pick b\n", "pick a\n", "\n"]

    def test_applying_twice_rotates_twice(self):
        lines = ["pick a\n", "pick b\n", "pick c\n", "\n"]
        twice = move_first_line_to_end(move_first_line_to_end(lines))
        assert twice == ["pick c\n", "pick a\n", "pick b\n", "\n"]
        assert twice != lines

    def test_single_line_unchanged(self):
        assert move_first_line_to_end(["pick a\n"]) == ["pick a\n"]
        assert move_first_line_to_end([]) == []

    def test_single_instruction_before_separator_unchanged(self):
        lines = ["pick a\n", "\n", "# comment\n"]
        assert move_first_line_to_end(lines) == lines

    def test_without_separator_appends(self):
        lines = ["pick a\n", "pick b\n", "pick c\n"]
        assert move_first_line_to_end(lines) == ["pick b\n", "pick c\n", "pick a\n"]

    def test_without_separator_or_final_newline(self):
        lines = ["pick a\n", "pick b\n", "pick c"]
        assert move_first_line_to_end(lines) == ["pick b\n", "pick c\n", "pick a"]

    def test_whitespace_only_line_is_separator(self):
        lines = ["pick a\n", "pick b\n", "  \n", "# x\n"]
        assert move_first_line_to_end(lines) == ["pick b\n", "pick a\n", "  \n", "# x\n"]

    def test_does_not_mutate_input(self):
        lines = ["pick a\n", "pick b\n", "\n"]
        move_first_line_to_end(lines)
        assert lines == ["pick a\n", "pick b\n", "\n"]


class TestRewriteTodoFile:
    """Test rewriting a todo file in place."""

    def test_rewrites_in_place(self, tmp_path):
        todo = tmp_path / "git-rebase-todo"
        todo.write_text(TODO)

        rewrite_todo_file(todo)

        assert todo.read_text().splitlines()[:4] == [
            "pick 2222222 Second",
            "pick 3333333 Third",
            "pick 1111111 First",
            "",
        ]

    def test_preserves_crlf(self, tmp_path):
        todo = tmp_path / "git-rebase-todo"
        todo.write_bytes(b"pick a\r\npick b\r\n\r\n")

        rewrite_todo_file(todo)

        assert todo.read_bytes() == b"pick b\r\npick a\r\n\r\n"

    def test_short_file_left_alone(self, tmp_path):
        todo = tmp_path / "git-rebase-todo"
        todo.write_text("noop\n")

        rewrite_todo_file(todo)

        assert todo.read_text() == "noop\n"

    def test_as_git_sequence_editor(self, git_repo, git_cmd, tmp_path):
        """The editor reorders a real interactive rebase."""
        for name in ("a", "b"):
            (git_repo / f"{name}.txt").write_text(name)
            git_cmd(git_repo, "add", f"{name}.txt")
            git_cmd(git_repo, "commit", "-m", f"Add {name}")

        script = tmp_path / "seq-editor.py"
        script.write_text(
            "import sys\n"
            "from git_smart.sequence_editor import rewrite_todo_file\n"
            "rewrite_todo_file(sys.argv[1])\n"
        )
        env = dict(os.environ, GIT_SEQUENCE_EDITOR=f'"{sys.executable}" "{script}"')
        subprocess.run(
            ["git", "rebase", "-i", "HEAD~2"],
            cwd=git_repo,
            env=env,
            check=True,
            capture_output=True,
        )

        subjects = git_cmd(git_repo, "log", "--format=%s", "-2").splitlines()
        assert subjects == ["Add a", "Add b"]
