"""Helpers for parsing logger-level CLI options.

Options of the form NAME=LEVEL may be repeated or given as a comma/space
separated list. Values are normalized into individual items and the textual
level names validated and converted into numeric logging levels.
"""

import logging
import re

import click

DEFAULT_LIB_LEVELS = {
    "sqlalchemy": logging.WARNING,
    "alembic": logging.WARNING,
    "aiosqlite": logging.WARNING,
}


def _normalize_items(value: str | list[str] | tuple[str, ...]) -> list[str]:
    """Flatten ``value`` into non-empty items split on commas and whitespace."""
    fragments = [value] if isinstance(value, str) else list(value)
    items: list[str] = []
    for fragment in fragments:
        items.extend(s for s in re.split(r"[,\s]+", fragment) if s)
    return items


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Click callback that parses NAME=LEVEL pairs into a name->level dict.

    The result starts from `DEFAULT_LIB_LEVELS`; later items override earlier
    ones for the same logger name.

    Returns:
        dict[str, int]: Mapping of logger names to numeric logging levels.

    Raises:
        click.BadParameter: If an item is not NAME=LEVEL or LEVEL is not a
            standard level name.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in _normalize_items(value):
        name, sep, level_str = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        lvl = logging.getLevelName(level_str.strip().upper())
        if not isinstance(lvl, int):
            raise click.BadParameter(f"Invalid log level: {level_str}")
        levels[name.strip()] = lvl
    return levels
