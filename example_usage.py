import json
import os

from dotenv import load_dotenv

from es_query_builder import Model

load_dotenv()


class Transaction(Model):
    index = os.getenv("INDEX_NAME", "transactions")


def show_request():
    """Print the request body without sending it."""
    print("\n=== Request body (debug mode) ===")

    body = (
        Transaction().query()
        .filter(lambda q: q.term("currency", "USD").range("timestamp", "2024-01-01 00:00:00", "2024-12-31 23:59:59"))
        .should(lambda q: q.match("receiver.name", "coffee").match_phrase("receiver.name", "book store"))
        .terms_aggregation(
            "categories",
            "receiver.category_type",
            {"size": 10},
            callback=lambda agg, factory: agg.add_aggregation(factory.sum("spent", "amount")),
        )
        .date_histogram("per_month", "timestamp", "month", "yyyy-MM")
        .sort("amount")
        .source("amount", "receiver.name")
        .size(5)
        .get(debug=True)
    )

    print(json.dumps(body, indent=2))


def run_search():
    """Run a search against the configured cluster and extract results."""
    print("\n=== Search ===")

    try:
        results = (
            Transaction().query()
            .match_all()
            .terms_aggregation("categories", "receiver.category_type")
            .size()
            .get()
        )
        print(f"✅ Total hits: {results.total()}")
        print(f"Receivers: {results.pluck('receiver.name').all()}")
        print(f"Categories: {json.dumps(results.aggregations('categories').all(), indent=2)}")
    except Exception as e:
        print(f"❌ Error: {e}")


if __name__ == "__main__":
    print("🚀 ES Query Builder example")
    print("=" * 50)

    show_request()

    print("\n" + "=" * 50)
    print("📝 To run the search, point the connection at a cluster:")
    print("export ELASTICSEARCH_HOST=localhost")
    print("export ELASTICSEARCH_PORT=9200")
    print("export INDEX_NAME=your_index_name")
    print("=" * 50)

    run_search()
