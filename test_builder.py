"""
Fluent builder behaviour: clause ordering, boolean composition,
aggregations, paging and state reset after execution.
"""

import pytest

from es_query_builder import Collection, ElasticsearchBuilder


def test_leaf_clauses_keep_call_order(builder):
    body = builder.term("a", "1").match("b", "x").terms("c", [1, 2]).term("a", "1").get(debug=True)

    assert body["query"] == {
        "bool": {
            "must": [
                {"term": {"a": "1"}},
                {"match": {"b": {"query": "x"}}},
                {"terms": {"c": [1, 2]}},
                {"term": {"a": "1"}},
            ]
        }
    }


@pytest.mark.parametrize("method, role", [
    ("must", "must"),
    ("must_not", "must_not"),
    ("should", "should"),
    ("filter", "filter"),
])
def test_single_clause_callback_fills_one_role(builder, method, role):
    getattr(builder, method)(lambda q: q.term("status", "active"))

    assert builder.get(debug=True)["query"] == {"bool": {role: [{"term": {"status": "active"}}]}}


def test_callback_with_several_leaves_adds_each(builder):
    builder.filter(lambda q: q.term("status", "active").range("price", 10, 20, "strict"))

    assert builder.get(debug=True)["query"] == {
        "bool": {
            "filter": [
                {"term": {"status": "active"}},
                {"range": {"price": {"gte": 10, "lte": 20, "format": "strict"}}},
            ]
        }
    }


def test_nested_boolean_callback_adds_whole_container(builder):
    builder.should(
        lambda q: q.must(lambda n: n.term("a", 1)).must_not(lambda n: n.term("b", 2))
    )

    assert builder.get(debug=True)["query"] == {
        "bool": {
            "should": [
                {
                    "bool": {
                        "must": [{"term": {"a": 1}}],
                        "must_not": [{"term": {"b": 2}}],
                    }
                }
            ]
        }
    }


def test_callback_returning_none_folds_nested_builder(builder):
    def only_active(q):
        q.term("status", "active")

    builder.must(only_active)

    assert builder.get(debug=True)["query"] == {"bool": {"must": [{"term": {"status": "active"}}]}}


def test_nested_builder_is_fresh_and_cleared(builder):
    seen = []

    def capture(q):
        seen.append(q)
        return q.match("title", "lamp")

    builder.term("brand", "acme").must(capture)
    nested = seen[0]

    assert nested is not builder
    assert isinstance(nested, ElasticsearchBuilder)
    assert nested.model is builder.model
    assert nested.queries == []
    assert len(builder.queries) == 1


def test_booleans_and_leaves_combine(builder):
    body = builder.match_all().must(lambda q: q.term("a", 1)).get(debug=True)

    assert body["query"] == {
        "bool": {
            "must": [
                {"bool": {"must": [{"term": {"a": 1}}]}},
                {"match_all": {}},
            ]
        }
    }


def test_match_all_with_paging_end_to_end(builder):
    body = builder.match_all().size(5).from_(10).get(debug=True)

    assert body == {"query": {"match_all": {}}, "from": 10, "size": 5}
    assert "aggs" not in body
    assert "aggregations" not in body


def test_empty_builder_still_sends_empty_bool(builder):
    assert builder.get(debug=True) == {"query": {"bool": {}}, "from": 0}


def test_size_defaults(builder):
    assert "size" not in builder.get(debug=True)
    assert builder.size().get(debug=True)["size"] == 15
    assert builder.size_less().get(debug=True)["size"] == 0


def test_range_defaults_format(builder):
    body = builder.range("created_at", "2020-01-01", "2020-12-31").get(debug=True)

    assert body["query"]["range"]["created_at"]["format"] == "yyyy-MM-dd HH:mm:ss"


def test_simple_query_string_and_match_phrase(builder):
    body = (
        builder.simple_query_string("lamp -red", ["title", "body"])
        .match_phrase("title", "desk lamp")
        .get(debug=True)
    )

    assert body["query"]["bool"]["must"] == [
        {
            "simple_query_string": {
                "query": "lamp -red",
                "fields": ["title", "body"],
                "default_operator": "and",
            }
        },
        {"match_phrase": {"title": {"query": "desk lamp"}}},
    ]


def test_sort_defaults_to_descending(builder):
    body = builder.sort("price").sort("name", "asc", {"missing": "_last"}).get(debug=True)

    assert body["sort"] == [
        {"price": {"order": "desc"}},
        {"name": {"missing": "_last", "order": "asc"}},
    ]


def test_source_accepts_list_or_arguments(builder):
    assert builder.source("title", "price").get(debug=True)["_source"] == ["title", "price"]
    assert builder.source(["brand"]).get(debug=True)["_source"] == ["brand"]


def test_aggregations(builder):
    body = (
        builder.size_less()
        .terms_aggregation(
            "brands",
            "brand",
            {"size": 5},
            callback=lambda agg, factory: agg.add_aggregation(factory.avg("avg_price", "price")),
        )
        .date_histogram("per_day", "created_at")
        .range_aggregation("prices", "price", [{"to": 50}, {"from": 50}])
        .sum("revenue", script="doc['price'].value * doc['qty'].value")
        .get(debug=True)
    )

    assert body["size"] == 0
    assert body["aggregations"] == {
        "brands": {
            "terms": {"field": "brand", "size": 5},
            "aggregations": {"avg_price": {"avg": {"field": "price"}}},
        },
        "per_day": {"date_histogram": {"field": "created_at", "calendar_interval": "day"}},
        "prices": {"range": {"field": "price", "ranges": [{"to": 50}, {"from": 50}], "keyed": False}},
        "revenue": {"sum": {"script": "doc['price'].value * doc['qty'].value"}},
    }


def test_aggregation_callback_can_override_defaults(builder):
    builder.date_histogram(
        "per_month",
        "created_at",
        callback=lambda agg, factory: agg.add_parameter("time_zone", "Europe/Paris"),
    )

    assert builder.get(debug=True)["aggregations"]["per_month"] == {
        "date_histogram": {
            "field": "created_at",
            "calendar_interval": "day",
            "time_zone": "Europe/Paris",
        }
    }


def test_debug_does_not_execute_and_matches_transmitted_body(builder, transport):
    builder.term("brand", "acme").terms_aggregation("tags", "tags").size(3)

    debug_body = builder.get(debug=True)
    assert transport.calls == []

    builder.get()
    assert transport.calls == [(debug_body, "products")]


def test_execution_returns_collection_and_resets_state(builder, transport):
    transport.response = {"_shards": {"total": 1}, "hits": {"total": 42, "hits": []}}

    builder.term("a", 1).terms_aggregation("tags", "tags").size(5).source("a").sort("price").from_(20)
    result = builder.get()

    assert isinstance(result, Collection)
    assert result.total() == 42

    assert builder.queries == []
    assert builder.aggregations == []
    assert builder.get_size() is None
    assert builder.get_source() is None
    assert [s.field for s in builder.get_sort()] == ["price"]
    assert builder.get_from() == 20


def test_builder_can_start_a_fresh_request_after_execution(builder, transport):
    builder.term("a", 1).get()

    body = builder.term("b", 2).get(debug=True)

    assert body["query"] == {"term": {"b": 2}}
    assert transport.calls[0][0]["query"] == {"term": {"a": 1}}


def test_custom_reset_scope(product, transport):
    builder = product.query(transport=transport, reset_scope={"queries", "sort", "from"})
    builder.term("a", 1).sort("price").from_(10).size(5)

    builder.get()

    assert builder.queries == []
    assert builder.get_sort() == []
    assert builder.get_from() == 0
    assert builder.get_size() == 5


def test_unknown_reset_field_is_rejected(product):
    with pytest.raises(ValueError):
        product.query(reset_scope={"queries", "everything"})


def test_transport_errors_propagate_and_keep_state(builder, transport):
    transport.error = ConnectionError("down")
    builder.term("a", 1)

    with pytest.raises(ConnectionError):
        builder.get()

    assert len(builder.queries) == 1
