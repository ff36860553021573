"""Unit tests for the write-once measure store."""

import pytest

from quality_measures.core.exceptions import (
    DuplicateMeasureError,
    MeasureError,
    UnknownComponentError,
)
from quality_measures.core.measure import Measure, MeasureStore


class TestMeasureStore:
    """Test point lookups and write-once semantics."""

    def test_get_absent(self, store):
        assert store.get(12341, "ncloc") is None
        assert not store.has(12341, "ncloc")

    def test_add_raw_and_get(self, store):
        store.add_raw(12341, "ncloc", 100)

        assert store.get(12341, "ncloc") == 100
        assert store.is_raw(12341, "ncloc")
        assert store.new_measures(12341) == {}

    def test_put_is_new_measure(self, store):
        store.put(1234, "comment_lines", 500)

        assert store.get(1234, "comment_lines") == 500
        assert not store.is_raw(1234, "comment_lines")
        assert store.new_measures(1234) == {"comment_lines": 500}

    def test_zero_is_a_value(self, store):
        store.add_raw(12341, "ncloc", 0)
        assert store.has(12341, "ncloc")

    def test_put_over_raw_fails(self, store):
        store.add_raw(1234, "comment_lines", 200)

        with pytest.raises(DuplicateMeasureError) as exc_info:
            store.put(1234, "comment_lines", 500)

        assert exc_info.value.context == {"ref": 1234, "metric": "comment_lines"}
        assert store.get(1234, "comment_lines") == 200

    def test_put_twice_fails(self, store):
        store.put(1, "comment_lines_density", 40.0)

        with pytest.raises(DuplicateMeasureError):
            store.put(1, "comment_lines_density", 40.0)

    def test_add_raw_twice_fails(self, store):
        store.add_raw(12341, "ncloc", 1)

        with pytest.raises(DuplicateMeasureError):
            store.add_raw(12341, "ncloc", 2)

    def test_unknown_component(self, store):
        with pytest.raises(UnknownComponentError):
            store.put(999, "ncloc", 1)
        with pytest.raises(UnknownComponentError):
            store.get(999, "ncloc")

    @pytest.mark.parametrize("value", ["12", None, True])
    def test_non_numeric_value(self, store, value):
        with pytest.raises(MeasureError, match="must be numeric"):
            store.add_raw(12341, "ncloc", value)

    def test_measures_lists_raw_and_derived(self, store):
        store.add_raw(1234, "ncloc", 300)
        store.put(1234, "comment_lines", 200)

        assert store.measures(1234) == {"ncloc": 300, "comment_lines": 200}

    def test_iteration_in_insertion_order(self, store):
        store.add_raw(12342, "ncloc", 2)
        store.add_raw(12341, "ncloc", 1)
        store.put(1234, "public_api", 3)

        assert list(store) == [
            Measure(12342, "ncloc", 2),
            Measure(12341, "ncloc", 1),
            Measure(1234, "public_api", 3),
        ]
        assert len(store) == 3

    def test_seed(self, store):
        store.seed({"12341": {"ncloc": 10}, 12342: {"ncloc": 20, "public_api": 1}})

        assert store.get(12341, "ncloc") == 10
        assert store.is_raw(12342, "public_api")

    def test_seed_invalid_ref(self, store):
        with pytest.raises(UnknownComponentError):
            store.seed({"file": {"ncloc": 10}})

    def test_to_dict_parents_first(self, store):
        store.add_raw(12341, "ncloc", 10)
        store.put(1, "public_api", 5)

        assert list(store.to_dict()) == [1, 12341]

    def test_tree_property(self, component_tree):
        assert MeasureStore(component_tree).tree is component_tree
