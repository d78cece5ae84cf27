"""Tests for store module - saving and loading the raw paste."""

import os

from spendpivot.store import TextStore, default_store_path


class TestTextStore:
    """Tests for TextStore."""

    def test_load_missing_is_empty(self, tmp_path):
        """Nothing saved yet loads as ''."""
        assert TextStore(str(tmp_path / 'data.tsv')).load() == ''

    def test_save_and_load(self, tmp_path):
        """Text is stored verbatim, creating parent dirs."""
        store = TextStore(str(tmp_path / 'nested' / 'data.tsv'))
        text = 'Date\tAmount\r\n2025-01-01\t-5\n'
        store.save(text)
        assert store.load() == text

    def test_line_endings_kept(self, tmp_path):
        """CRLF and bare CR line endings come back unchanged."""
        store = TextStore(str(tmp_path / 'data.tsv'))
        text = 'Date\tAmount\r\n2025-01-01\t-5\r\n2025-01-02\t-6\r'
        store.save(text)
        assert store.load() == text
        with open(store.path, 'rb') as f:
            assert f.read() == text.encode('utf-8')

    def test_save_overwrites(self, tmp_path):
        """Only the most recent text is kept."""
        store = TextStore(str(tmp_path / 'data.tsv'))
        store.save('first')
        store.save('second')
        assert store.load() == 'second'

    def test_clear(self, tmp_path):
        """clear() removes the blob; clearing twice is fine."""
        store = TextStore(str(tmp_path / 'data.tsv'))
        store.save('x')
        store.clear()
        store.clear()
        assert not os.path.exists(store.path)
        assert store.load() == ''

    def test_env_override(self, tmp_path, monkeypatch):
        """SPENDPIVOT_STORE sets the default location."""
        target = str(tmp_path / 'blob.tsv')
        monkeypatch.setenv('SPENDPIVOT_STORE', target)
        assert default_store_path() == target
        assert TextStore().path == target
