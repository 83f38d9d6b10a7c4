"""Tests for CompletionService."""

from __future__ import annotations

from pwctl.domain.errors import ENCRYPT, StoreError
from pwctl.infrastructure.store import FileStore
from pwctl.services.completion import CompletionService
from tests.conftest import put_flat


class BrokenStore(FileStore):
    def list(self) -> list[str]:
        msg = "cannot walk store"
        raise StoreError(msg)


class TestSuggest:
    def test_domains_from_store(self, store: FileStore) -> None:
        put_flat(store, "web/github.com", "x")
        put_flat(store, "web/login.example.net", "x")
        put_flat(store, "web/example.org", "x")
        result = CompletionService(store).suggest("ex")
        assert result.ok
        assert result.op == "complete"
        assert result.data["items"] == ["example.net", "example.org"]
        assert result.data["count"] == 2

    def test_needle_recorded(self, store: FileStore) -> None:
        put_flat(store, "web/github.com", "x")
        result = CompletionService(store).suggest("git")
        assert result.data["needle"] == "git"

    def test_empty_needle_suggests_nothing(self, store: FileStore) -> None:
        put_flat(store, "web/github.com", "x")
        result = CompletionService(store).suggest("")
        assert result.ok
        assert result.data["items"] == []
        assert result.data["count"] == 0

    def test_empty_needle_skips_store(self, store_root) -> None:
        result = CompletionService(BrokenStore(store_root)).suggest("")
        assert result.ok
        assert result.data["items"] == []

    def test_empty_store(self, store: FileStore) -> None:
        result = CompletionService(store).suggest("ex")
        assert result.ok
        assert result.data["items"] == []

    def test_store_failure(self, store_root) -> None:
        result = CompletionService(BrokenStore(store_root)).suggest("ex")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == ENCRYPT
