"""Tests for the commit message newline filter."""

import io

from gitkeeper.git import msg_filter
from gitkeeper.git.msg_filter import NEWLINE_PLACEHOLDER, restore_newlines


class TestRestoreNewlines:
    def test_replaces_every_placeholder(self):
        message = f"subject{NEWLINE_PLACEHOLDER}{NEWLINE_PLACEHOLDER}body"
        assert restore_newlines(message) == "subject\n\nbody"

    def test_message_without_placeholder_is_unchanged(self):
        assert restore_newlines("plain message\n") == "plain message\n"


class TestMain:
    def test_main_filters_stdin_to_stdout(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(f"a{NEWLINE_PLACEHOLDER}b\n"))
        msg_filter.main()
        assert capsys.readouterr().out == "a\nb\n"
