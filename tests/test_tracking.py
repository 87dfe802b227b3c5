"""
Tests for the tracking store — markers inside .gitignore.
"""

from pathlib import Path

from bootstrapper.core.persistence.tracking import TrackingStore


class TestLoad:
    def test_missing_file_uses_template(self, tmp_path: Path):
        store = TrackingStore.load(tmp_path / ".gitignore", "/vendor\n")
        assert store.has_ignore("/vendor")
        assert store.dirty  # never written yet
        assert not (tmp_path / ".gitignore").exists()

    def test_existing_file_wins_over_template(self, tmp_path: Path):
        path = tmp_path / ".gitignore"
        path.write_text("node_modules\n")
        store = TrackingStore.load(path, "/vendor\n")
        assert store.has_ignore("node_modules")
        assert not store.has_ignore("/vendor")
        assert not store.dirty


class TestMarkers:
    def test_add_and_query(self, store: TrackingStore):
        assert not store.has_managed_marker("Acme", "Blog")
        store.add_managed_marker("Acme", "Blog")
        assert store.has_managed_marker("Acme", "Blog")

    def test_marker_is_case_sensitive(self, store: TrackingStore):
        store.add_managed_marker("Acme", "Blog")
        assert not store.has_managed_marker("acme", "blog")

    def test_add_is_idempotent(self, store: TrackingStore):
        store.add_managed_marker("Acme", "Blog")
        once = store.render()
        store.add_managed_marker("Acme", "Blog")
        assert store.render() == once
        assert once.count("# Acme.Blog") == 1

    def test_marker_block_ignores_plugin_directory(self, store: TrackingStore):
        store.add_managed_marker("Acme", "Blog")
        assert "# Acme.Blog\nplugins/acme/blog\n" in store.render()

    def test_managed_identities(self, store: TrackingStore):
        store.add_managed_marker("Acme", "Blog")
        store.add_ignore("/storage", comment="not a plugin")
        store.add_managed_marker("RainLab", "User")
        assert store.managed_identities() == ["Acme.Blog", "RainLab.User"]


class TestFlush:
    def test_preserves_unrelated_content(self, tmp_path: Path):
        path = tmp_path / ".gitignore"
        original = "# my rules\n/vendor\n\n!keep.me\n"
        path.write_text(original)

        store = TrackingStore.load(path)
        store.add_managed_marker("Acme", "Blog")
        store.flush()

        content = path.read_text()
        assert content.startswith(original)
        assert content.endswith("# Acme.Blog\nplugins/acme/blog\n")

    def test_unchanged_file_is_rewritten_verbatim(self, tmp_path: Path):
        path = tmp_path / ".gitignore"
        path.write_text("/vendor\n# no newline at end")
        store = TrackingStore.load(path)
        store.flush()
        assert path.read_text() == "/vendor\n# no newline at end"

    def test_flush_clears_dirty(self, tmp_path: Path):
        store = TrackingStore.load(tmp_path / ".gitignore", "/vendor\n")
        store.add_managed_marker("Acme", "Blog")
        assert store.dirty
        store.flush()
        assert not store.dirty

    def test_reload_sees_markers(self, tmp_path: Path):
        path = tmp_path / ".gitignore"
        store = TrackingStore.load(path)
        store.add_managed_marker("Acme", "Blog")
        store.flush()

        reloaded = TrackingStore.load(path)
        assert reloaded.has_managed_marker("Acme", "Blog")
        assert not reloaded.dirty

    def test_no_temp_files_left(self, tmp_path: Path):
        store = TrackingStore.load(tmp_path / ".gitignore")
        store.add_ignore("/vendor")
        store.flush()
        assert list(tmp_path.glob(".gitignore_*.tmp")) == []

    def test_add_ignore_is_idempotent(self, tmp_path: Path):
        path = tmp_path / ".gitignore"
        path.write_text(".envoy\n")
        store = TrackingStore.load(path)
        store.add_ignore(".envoy", comment="Deployment")
        assert not store.dirty
