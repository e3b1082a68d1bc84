"""Tests for the shared current-query slot."""

from sqlbuilder.repositories.query_repository import SavedQuery
from sqlbuilder.services.templates import TEMPLATES
from sqlbuilder.state.current_query import CurrentQuery
from sqlbuilder.state.query_builder_state import QueryBuilderState


def test_last_writer_wins():
    current = CurrentQuery()
    current.from_builder("SELECT *\nFROM customers")
    current.from_draft("SELECT COUNT(*) FROM leads")
    assert current.text == "SELECT COUNT(*) FROM leads"
    assert current.source == "draft"

    current.from_template(TEMPLATES[0])
    assert current.text == TEMPLATES[0].query
    assert current.source == "template"


def test_saved_query_producer():
    current = CurrentQuery()
    current.from_saved(SavedQuery(id=1, name="x", query="SELECT 1", saved_at="2024-11-01T00:00:00+00:00"))
    assert (current.text, current.source) == ("SELECT 1", "saved")


def test_builder_change_overwrites_draft():
    current = CurrentQuery()
    state = QueryBuilderState(on_change=current.from_builder)
    current.from_draft("SELECT 42")
    state.set_table("orders")
    assert current.text == "SELECT *\nFROM orders\nLIMIT 10"


def test_listeners_notified():
    current = CurrentQuery()
    seen = []
    current.subscribe(lambda text, source: seen.append((text, source)))
    current.set_text("SELECT 2")
    assert seen == [("SELECT 2", "manual")]
