"""Command-line construction from option mappings.

Turns a mapping of flag names to values into the flag section of a git
command line. Values are interpolated verbatim: quoting values that contain
spaces or shell metacharacters is the caller's job; quote_options() does it
for a whole mapping.
"""

import re
import shlex
from collections.abc import Mapping, Sequence

type OptionValue = bool | str | Sequence[str] | None
"""A single option value: a switch, one value, or a repeated flag."""

type CommandOptions = Mapping[str, OptionValue]
"""Mapping of flag name to value.

The reserved key ``"--"`` holds trailing positional arguments, rendered after
a literal ``--`` separator.
"""

ARGS_KEY = "--"

_OPTION_NAME = re.compile(r"[A-Za-z0-9][A-Za-z0-9.-]*")


def _normalize(value: bool | str | Sequence[str]) -> list[str]:
    if value is True:
        return [""]
    if isinstance(value, str):
        return [value]
    return list(value)


def _flag(name: str) -> str:
    return f"-{name}" if len(name) == 1 else f"--{name}"


def build_command(base: str, options: CommandOptions | None = None) -> str:
    """Append rendered options to a base command.

    Options whose value is False or None are dropped. True renders a bare
    flag, a string renders ``flag value`` and a list renders the flag once
    per element, in order. Single-character names get one dash, longer names
    two. Trailing arguments under ``"--"`` come last.

    Args:
        base: The command to extend, e.g. ``"git fetch origin"``.
        options: Optional mapping of flag names to values.

    Returns:
        str: The complete command line.

    Example:
        >>> build_command("git fetch origin", {"depth": "1", "no-tags": True, "v": False})
        'git fetch origin --depth 1 --no-tags'
        >>> build_command("git add", {"--": ["a.txt", "b.txt"]})
        'git add -- a.txt b.txt'
    """
    cmd = base.strip()
    options = dict(options or {})
    args = options.pop(ARGS_KEY, None)

    rendered = [
        f"{_flag(name)} {value}".strip()
        for name, raw in options.items()
        if raw is not None and raw is not False
        for value in _normalize(raw)
    ]
    if rendered:
        cmd += " " + " ".join(rendered)

    if args is not None and args is not False:
        cmd += " -- " + " ".join(_normalize(args))

    return cmd


def quote_options(options: CommandOptions | None) -> dict[str, OptionValue]:
    """Shell-quote every value of an options mapping.

    For callers passing values they do not control (command-line arguments,
    HTTP request bodies). Switches and dropped values are kept as they are;
    string values and list elements go through ``shlex.quote``.

    Raises:
        ValueError: If an option name is not a plain flag name.
    """
    quoted: dict[str, OptionValue] = {}
    for name, value in (options or {}).items():
        if name != ARGS_KEY and not _OPTION_NAME.fullmatch(name):
            raise ValueError(f"Invalid option name: {name!r}")
        if isinstance(value, str):
            value = shlex.quote(value) if value else value
        elif value is not None and not isinstance(value, bool):
            value = [shlex.quote(v) for v in value]
        quoted[name] = value
    return quoted
