"""
Persistence for the last pasted export.

Keeps exactly one raw text blob on disk so `spendpivot run` can be re-run
without pasting again. The blob is stored verbatim; parsing always happens
from scratch.
"""

import os

DEFAULT_STORE_PATH = os.path.join('~', '.spendpivot', 'data.tsv')


def default_store_path():
    """Store location: SPENDPIVOT_STORE env var, else ~/.spendpivot/data.tsv."""
    env_path = os.environ.get('SPENDPIVOT_STORE')
    return os.path.expanduser(env_path or DEFAULT_STORE_PATH)


class TextStore:
    """A single text blob kept in a file."""

    def __init__(self, path=None):
        self.path = os.path.abspath(os.path.expanduser(path or default_store_path()))

    def load(self):
        """Return the stored text, or '' when nothing has been saved."""
        if not os.path.exists(self.path):
            return ''
        with open(self.path, 'r', encoding='utf-8', newline='') as f:
            return f.read()

    def save(self, text):
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8', newline='') as f:
            f.write(text)

    def clear(self):
        if os.path.exists(self.path):
            os.unlink(self.path)

    def __repr__(self):
        return f"TextStore({self.path!r})"
