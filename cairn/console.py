#!/usr/bin/env python3
"""
Console utilities: UTF-8 output on Windows and terminal color detection
"""

import os
import sys


def setup_windows_console():
    """
    Setup Windows console to handle Unicode properly and avoid encoding errors
    """
    if sys.platform.startswith('win'):
        if hasattr(sys.stdout, 'reconfigure'):
            sys.stdout.reconfigure(encoding='utf-8', errors='replace')
            sys.stderr.reconfigure(encoding='utf-8', errors='replace')

        os.environ['PYTHONIOENCODING'] = 'utf-8:replace'


def is_terminal(stream) -> bool:
    """True when ``stream`` is attached to a character device (a TTY)"""
    if stream is None:
        return False
    try:
        return stream.isatty()
    except (AttributeError, ValueError, OSError):
        return False


def supports_color(stream) -> bool:
    """ANSI colors only on a terminal, and never when NO_COLOR is set"""
    if os.getenv('NO_COLOR'):
        return False
    return is_terminal(stream)
