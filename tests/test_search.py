"""Tests for freebase_api/topic.py — keyword search and score ordering."""

from __future__ import annotations

import pytest

from freebase_api.models import Attribute
from freebase_api.topic import Topic, search


@pytest.fixture
def results(session) -> dict:
    return search("dylan", session)


@pytest.fixture
def item(results) -> Topic:
    return next(iter(results.values()))


class TestSearchCall:
    def test_makes_a_search_api_call(self, session):
        search("dylan", session)
        session.search.assert_called_once_with("dylan")

    def test_forwards_options(self, session):
        search("dylan", session, limit=2, lang="fr")
        session.search.assert_called_once_with("dylan", limit=2, lang="fr")

    def test_blank_query_raises(self, session):
        with pytest.raises(ValueError, match="empty"):
            search("  ", session)
        session.search.assert_not_called()

    def test_no_results(self, session):
        session.search.return_value = []
        assert search("zzzz", session) == {}


class TestOrdering:
    def test_returns_a_dict(self, results):
        assert isinstance(results, dict)

    def test_returns_ordered_scores(self, results):
        keys = list(results)
        assert keys[0] == 72.587578
        assert keys[-1] == 20.738529
        assert keys == sorted(keys, reverse=True)

    def test_unsorted_records_are_ordered(self, session, search_data):
        session.search.return_value = list(reversed(search_data))
        keys = list(search("dylan", session))
        assert keys == [72.587578, 54.160534, 31.021856, 20.738529]

    def test_duplicate_score_keeps_first_hit(self, session):
        session.search.return_value = [
            {"mid": "/m/first", "name": "First", "score": 10.0},
            {"mid": "/m/second", "name": "Second", "score": 10.0},
        ]
        results = search("dup", session)
        assert len(results) == 1
        assert results[10.0].id == "/m/first"

    def test_malformed_hit_is_skipped(self, session):
        session.search.return_value = [
            {"name": "no id", "score": 3.0},
            {"mid": "/m/1", "name": "Kept", "score": 1.0},
        ]
        results = search("broken", session)
        assert list(results) == [1.0]
        assert results[1.0].id == "/m/1"


class TestHitTopics:
    def test_returns_topics(self, item):
        assert isinstance(item, Topic)

    def test_stores_the_id(self, item):
        assert item.id == "/m/01vrncs"

    def test_stores_some_properties(self, item):
        assert list(item.properties) == ["/type/object/name", "/common/topic/notable_for"]

    def test_name_and_notable(self, item):
        assert item.name == "Bob Dylan"
        notable = item.property_values("/common/topic/notable_for")[0]
        assert isinstance(notable, Topic)
        assert notable.id == "/m/016z4k"
        assert notable.name == "Singer-songwriter"

    def test_name_is_an_attribute(self, item):
        name = item.property_values("/type/object/name")[0]
        assert isinstance(name, Attribute)
        assert name.lang == "en"

    def test_hit_without_notable(self, results):
        plain = results[31.021856]
        assert list(plain.properties) == ["/type/object/name"]

    def test_hit_with_property_map_is_used_as_is(self, session):
        session.search.return_value = [
            {
                "id": "/m/0abc",
                "score": 5.5,
                "properties": {
                    "/common/topic/alias": {
                        "valuetype": "string",
                        "values": [{"value": "Bobby", "text": "Bobby"}],
                    },
                },
            },
        ]
        topic = search("bobby", session)[5.5]
        assert topic.id == "/m/0abc"
        assert list(topic.properties) == ["/common/topic/alias"]
