"""OSC-8 hyperlink utilities for the SHELTER CLI.

Detects whether the active text stream supports OSC-8 terminal hyperlinks and
renders a URL as a clickable link, falling back to plain text otherwise.
"""

import os
import sys
from typing import TextIO

OSC8_TERMINALS = {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"}


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Heuristically detect whether ``stream`` supports OSC-8 hyperlinks.

    Args:
        stream: Text stream to probe; defaults to ``sys.stdout``.

    Returns:
        bool: False for non-TTY streams (pipes, redirects) and for terminals
        not on a small allowlist.
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    terminal_program = (os.getenv("TERM_PROGRAM") or "").lower()
    return bool(
        terminal_program in OSC8_TERMINALS
        or os.getenv("WT_SESSION")  # Windows Terminal
        or os.getenv("VTE_VERSION")  # GNOME Terminal, Tilix, etc.
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str, text: str | None = None) -> str:
    """Render ``url`` as an OSC-8 hyperlink, or as plain text when unsupported.

    Args:
        url: Target URL.
        text: Visible label; the URL itself if omitted.
    """
    label = text or url
    if not supports_osc8():
        return label
    return f"\x1b]8;;{url}\x07{label}\x1b]8;;\x07"  # OSC 8 ; ; URL BEL
