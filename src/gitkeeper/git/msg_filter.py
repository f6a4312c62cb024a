"""Commit message filter restoring newlines.

Used as the ``--msg-filter`` of ``git filter-branch``: reads a commit message
on stdin and writes it back with every newline placeholder replaced by a real
newline.

Usage:
    git filter-branch --msg-filter "python -m gitkeeper.git.msg_filter" @~1..@
"""

import sys

NEWLINE_PLACEHOLDER = "<:NEWLINE:>"


def restore_newlines(message: str) -> str:
    """Replace newline placeholders in ``message`` with newlines."""
    return message.replace(NEWLINE_PLACEHOLDER, "\n")


def main() -> None:
    sys.stdout.write(restore_newlines(sys.stdin.read()))


if __name__ == "__main__":
    main()
