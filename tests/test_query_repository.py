"""Tests for saved queries and API key persistence."""

import json

import pytest

from sqlbuilder.core.exceptions import ValidationError
from sqlbuilder.repositories.query_repository import (
    CREDENTIAL_KEY,
    SAVED_QUERIES_KEY,
    SavedQuery,
    SavedQueryRepository,
)


class TestSavedQueries:
    """Save / load / delete round-trips."""

    def test_empty_store_gives_empty_list(self, repo):
        assert repo.load_saved_queries() == []
        assert repo.list_saved() == []

    def test_save_then_reload(self, repo):
        saved = repo.save_query("Test", "SELECT 1")

        loaded = repo.load_saved_queries()
        assert len(loaded) == 1
        assert loaded[0].name == "Test"
        assert loaded[0].query == "SELECT 1"
        assert loaded[0].id == saved.id

    def test_delete_then_reload(self, repo):
        saved = repo.save_query("Test", "SELECT 1")
        repo.delete_saved_query(saved.id)
        assert repo.load_saved_queries() == []

    def test_delete_unknown_id_is_noop(self, repo):
        repo.save_query("Test", "SELECT 1")
        repo.delete_saved_query(-1)
        assert len(repo.load_saved_queries()) == 1

    def test_insertion_order_and_unique_ids(self, repo):
        a = repo.save_query("A", "SELECT 1")
        b = repo.save_query("B", "SELECT 2")
        c = repo.save_query("C", "SELECT 3")
        assert [q.name for q in repo.list_saved()] == ["A", "B", "C"]
        assert len({a.id, b.id, c.id}) == 3

    def test_new_instance_sees_saved_queries(self, repo, store):
        repo.save_query("Kept", "SELECT * FROM leads")
        again = SavedQueryRepository(store)
        assert [q.name for q in again.list_saved()] == ["Kept"]

    def test_wire_format(self, repo, store):
        saved = repo.save_query("Test", "SELECT 1")
        data = json.loads(store.get(SAVED_QUERIES_KEY))
        assert data == [{"id": saved.id, "name": "Test", "query": "SELECT 1", "savedAt": saved.saved_at}]

    @pytest.mark.parametrize("name,text", [("", "SELECT 1"), ("  ", "SELECT 1"), ("Name", ""), ("Name", " \n")])
    def test_blank_name_or_text_rejected(self, repo, name, text):
        with pytest.raises(ValidationError):
            repo.save_query(name, text)
        assert repo.list_saved() == []


class TestCorruptData:
    """Unreadable stored data degrades to an empty list."""

    @pytest.mark.parametrize("raw", ["not json", '{"a": 1}', '[{"id": 1}]'])
    def test_unreadable_payload_gives_empty_list(self, store, raw):
        store.set(SAVED_QUERIES_KEY, raw)
        repo = SavedQueryRepository(store)
        assert repo.list_saved() == []
        # исходные байты не перезаписываются при загрузке
        assert store.get(SAVED_QUERIES_KEY) == raw

    def test_save_after_corrupt_data_overwrites(self, store):
        store.set(SAVED_QUERIES_KEY, "not json")
        repo = SavedQueryRepository(store)
        repo.save_query("Fresh", "SELECT 1")
        assert [q.name for q in repo.load_saved_queries()] == ["Fresh"]


class TestCredential:
    """API key get/set."""

    def test_missing_credential(self, repo):
        assert repo.load_credential() is None
        assert repo.credential is None

    def test_save_and_overwrite(self, repo, store):
        repo.save_credential("sk-ant-one")
        repo.save_credential("sk-ant-two")
        assert repo.load_credential() == "sk-ant-two"
        assert repo.credential == "sk-ant-two"
        assert store.get(CREDENTIAL_KEY) == "sk-ant-two"

    def test_credential_loaded_at_construction(self, store):
        store.set(CREDENTIAL_KEY, "sk-ant-stored")
        assert SavedQueryRepository(store).credential == "sk-ant-stored"

    def test_credential_stored_verbatim(self, repo, store):
        repo.save_credential("  sk-ant-x ")
        assert store.get(CREDENTIAL_KEY) == "  sk-ant-x "
        assert repo.credential == "  sk-ant-x "


class TestSavedDate:
    def test_day_has_no_leading_zero(self):
        # без зоны: читается как локальное время, дата не сдвигается
        q = SavedQuery(id=1, name="n", query="SELECT 1", saved_at="2024-11-01T12:00:00")
        assert q.saved_date == "November 1, 2024"

    def test_unparseable_date_returned_as_is(self):
        q = SavedQuery(id=1, name="n", query="SELECT 1", saved_at="yesterday")
        assert q.saved_date == "yesterday"
