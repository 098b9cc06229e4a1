"""
Response collection.

Wraps a raw search response (or any structure extracted from one) and
offers chained extraction: hit totals, dotted-path plucking and
aggregation bucket reshaping. Extraction never modifies the wrapped
structure; every operation returns a new Collection.
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

Items = Union[List[Any], Dict[str, Any]]

_COMPOSITE = (Mapping, list, tuple)


class Collection:
    """
    View over a response document or a part of it.

    Supports len(), iteration, indexing and comparison with plain lists
    and dicts.
    """

    def __init__(self, items: Optional[Items] = None):
        self.items = items if items is not None else []

    def all(self) -> Items:
        """Return the underlying items."""
        return self.items

    def first(self, default: Any = None) -> Any:
        """First element (first value for mappings), or default when empty."""
        values = self.items.values() if isinstance(self.items, Mapping) else self.items
        return next(iter(values), default)

    def count(self) -> int:
        return len(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __getitem__(self, key: Any) -> Any:
        return self.items[key]

    def __contains__(self, key: Any) -> bool:
        return key in self.items

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Collection):
            return self.items == other.items
        return self.items == other

    def __repr__(self) -> str:
        return f"Collection({self.items!r})"

    def total(self) -> int:
        """
        Total number of hits.

        Handles both the plain integer and the {"value": n, "relation": ...}
        forms of hits.total.
        """
        total = self.items["hits"]["total"]
        if isinstance(total, Mapping):
            return total["value"]
        return total

    def source(self) -> "Collection":
        """Project a raw response down to the list of hit _source documents."""
        return Collection([hit["_source"] for hit in self.items["hits"]["hits"]])

    def pluck(self, value: str, key: Optional[str] = None) -> "Collection":
        """
        Get the values at a dotted path from every element.

        A raw response is first reduced to its hit sources. For each path
        segment an element that is not a dict or list passes through as is;
        an element holding the segment yields that value; otherwise the
        element's first value is indexed by the segment. This last step
        covers shapes that wrap the addressable object one level deeper and
        raises the usual KeyError/TypeError/IndexError when it does not fit.

        Args:
            value: Dotted path, e.g. "author.name"
            key: Optional dotted path whose values key the result

        Returns:
            Collection of plucked values (a dict when key is given)
        """
        items = self.items
        if self._is_raw_response(items):
            items = self.source().items

        values = self._pluck_path(items, value)
        if key is None:
            return Collection(values)

        keys = self._pluck_path(items, key)
        if isinstance(values, Mapping):
            return Collection(dict(zip(keys.values(), values.values())))
        return Collection(dict(zip(keys, values)))

    def aggregations(self, *names: str) -> "Collection":
        """
        Get aggregation results.

        Without names the whole aggregations document is returned. With
        names, the buckets of each aggregation are reshaped to
        {"title": key, "count": doc_count}; a single name yields its list,
        several names yield a mapping from name to list.
        """
        if not names:
            return Collection(self.items["aggregations"])

        reshaped = {
            name: [
                {"title": bucket["key"], "count": bucket["doc_count"]}
                for bucket in self.items["aggregations"][name]["buckets"]
            ]
            for name in names
        }

        if len(names) > 1:
            return Collection(reshaped)
        return Collection(reshaped[names[0]])

    def buckets(self) -> "Collection":
        """Buckets of the aggregation named "hits"."""
        return Collection(self.aggregations()["hits"]["buckets"])

    @staticmethod
    def _is_raw_response(items: Any) -> bool:
        return isinstance(items, Mapping) and bool(items.get("_shards"))

    @classmethod
    def _pluck_path(cls, items: Items, path: str) -> Items:
        for column in path.split("."):
            if isinstance(items, Mapping):
                items = {k: cls._pluck_item(v, column) for k, v in items.items()}
            else:
                items = [cls._pluck_item(item, column) for item in items]
        return items

    @staticmethod
    def _pluck_item(item: Any, column: str) -> Any:
        if not isinstance(item, _COMPOSITE):
            return item

        if isinstance(item, Mapping):
            if column in item:
                return item[column]
            if not item:
                raise KeyError(column)
            return next(iter(item.values()))[column]

        if column.isdigit() and int(column) < len(item):
            return item[int(column)]
        if not item:
            raise KeyError(column)
        return item[0][column]
