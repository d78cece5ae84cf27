"""
Terminal color support shared by the CLI commands.
"""

import os
import sys


def _supports_color():
    """Check if the terminal supports color output."""
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not sys.stdout.isatty():
        return False
    term = os.environ.get('TERM', '')
    return term != 'dumb'


class _Colors:
    """ANSI color codes with automatic detection."""
    def __init__(self):
        if _supports_color():
            self.RESET = '\033[0m'
            self.BOLD = '\033[1m'
            self.DIM = '\033[2m'
            self.GREEN = '\033[32m'
            self.CYAN = '\033[36m'
            self.RED = '\033[31m'
            self.YELLOW = '\033[33m'
        else:
            self.RESET = ''
            self.BOLD = ''
            self.DIM = ''
            self.GREEN = ''
            self.CYAN = ''
            self.RED = ''
            self.YELLOW = ''


C = _Colors()
