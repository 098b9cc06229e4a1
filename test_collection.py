"""
Response extraction: totals, plucking and aggregation buckets.
"""

import copy

import pytest

from es_query_builder import Collection


def test_total_plain_integer():
    assert Collection({"hits": {"total": 42, "hits": []}}).total() == 42


def test_total_value_object(raw_response):
    assert Collection(raw_response).total() == 2


def test_total_on_malformed_response_raises():
    with pytest.raises(KeyError):
        Collection({"took": 1}).total()


def test_pluck_path():
    items = Collection([{"a": {"b": 1}}, {"a": {"b": 2}}])
    assert items.pluck("a.b") == [1, 2]


def test_pluck_one_level_deeper():
    assert Collection([{"x": {"a": {"b": 3}}}]).pluck("a.b") == [3]


def test_pluck_passes_scalars_through():
    assert Collection([1, {"a": 2}, "c"]).pluck("a") == [1, 2, "c"]


def test_pluck_raw_response_uses_sources(raw_response):
    original = copy.deepcopy(raw_response)
    collection = Collection(raw_response)

    assert collection.pluck("title") == ["Desk lamp", "Floor lamp"]
    assert collection.pluck("brand.name") == ["Acme", "Lumo"]
    assert collection.items == original


def test_pluck_fails_when_neither_branch_applies():
    with pytest.raises(KeyError):
        Collection([{"x": {"y": 1}}]).pluck("a")

    with pytest.raises(TypeError):
        Collection([{"x": 5}]).pluck("a")


def test_pluck_keyed():
    items = Collection([{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])
    assert items.pluck("name", key="id") == {1: "a", 2: "b"}


def test_pluck_chains():
    items = Collection([{"a": {"b": {"c": 1}}}])
    assert items.pluck("a").pluck("b.c") == [1]


def test_source_projection(raw_response):
    assert Collection(raw_response).source().pluck("title").all() == ["Desk lamp", "Floor lamp"]


def test_aggregations_single_name(raw_response):
    assert Collection(raw_response).aggregations("color") == [
        {"title": "red", "count": 5},
        {"title": "blue", "count": 2},
    ]


def test_aggregations_many_names(raw_response):
    result = Collection(raw_response).aggregations("color", "size")

    assert set(result.all()) == {"color", "size"}
    assert result["size"] == [{"title": "XL", "count": 1}]
    assert result["color"][0] == {"title": "red", "count": 5}


def test_aggregations_without_names(raw_response):
    result = Collection(raw_response).aggregations()
    assert result.all() is raw_response["aggregations"]


def test_aggregations_missing_name_raises(raw_response):
    with pytest.raises(KeyError):
        Collection(raw_response).aggregations("weight")


def test_buckets():
    response = {
        "aggregations": {
            "hits": {"buckets": [{"key": "a", "doc_count": 1}, {"key": "b", "doc_count": 4}]}
        }
    }
    assert Collection(response).buckets() == [
        {"key": "a", "doc_count": 1},
        {"key": "b", "doc_count": 4},
    ]


def test_container_helpers():
    items = Collection(["a", "b"])

    assert len(items) == 2
    assert items.count() == 2
    assert list(items) == ["a", "b"]
    assert items[1] == "b"
    assert items.first() == "a"
    assert Collection().first("none") == "none"
    assert items == Collection(["a", "b"])


def test_results_from_builder(builder, transport, raw_response):
    transport.response = raw_response

    results = builder.match("title", "lamp").terms_aggregation("color", "color").get()

    assert results.total() == 2
    assert results.pluck("title") == ["Desk lamp", "Floor lamp"]
    assert results.aggregations("color")[0] == {"title": "red", "count": 5}
