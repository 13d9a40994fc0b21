"""CLI helpers for SHELTER.

Utilities used by the command-line interface: URL sanitization for safe display,
OSC-8 terminal hyperlinks when supported, message emitters that write to
stderr with emoji→ASCII fallbacks, and the ``-L NAME=LEVEL`` option parser.
"""

from .db_url import sanitize_url
from .hyperlinks import hyperlink
from .log_level_parser import parse_log_level
from .messages import error, success, warn

__all__ = ["sanitize_url", "warn", "success", "error", "hyperlink", "parse_log_level"]
