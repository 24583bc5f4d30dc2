"""Tests for the StreamEvent record."""

import attrs
import pytest

from hafetch.core.stream_event import StreamEvent


class TestStreamEventEquality:
    """Structural equality and hashing."""

    def test_equal_when_all_fields_match(self):
        assert StreamEvent("s", 1000, ["a", 1]) == StreamEvent("s", 1000, ("a", 1))

    @pytest.mark.parametrize(
        "other",
        [
            StreamEvent("t", 1000, ["a", 1]),
            StreamEvent("s", 1001, ["a", 1]),
            StreamEvent("s", 1000, ["a", 2]),
            StreamEvent("s", 1000, ["a"]),
        ],
    )
    def test_not_equal_when_any_field_differs(self, other):
        assert StreamEvent("s", 1000, ["a", 1]) != other

    def test_nested_data_compared_deeply(self):
        assert StreamEvent("s", 0, [("x", 1)]) == StreamEvent("s", 0, [("x", 1)])

    def test_hash_matches_equality(self):
        events = {StreamEvent("s", 5, ["a"]), StreamEvent("s", 5, ["a"])}
        assert len(events) == 1

    def test_unhashable_data_items_are_hashable(self):
        first = StreamEvent("s", 5, [["a", "b"], {"k": [1, 2]}, {3}])
        second = StreamEvent("s", 5, [["a", "b"], {"k": [1, 2]}, {3}])

        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1
        assert first != StreamEvent("s", 5, [["a", "c"], {"k": [1, 2]}, {3}])

    def test_is_immutable(self):
        event = StreamEvent("s", 0, [])
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            event.timestamp = 1

    def test_none_data_becomes_empty(self):
        assert StreamEvent("s", 0, None).data == ()


class TestStreamEventRendering:
    """Human readable rendering."""

    def test_str(self):
        event = StreamEvent("cpuUsageStream", 1462406400123, ["host1", 0.75, None])
        assert str(event) == (
            "StreamEvent[stream=CPUUSAGESTREAM,timestamp=2016-05-05 00:00:00,123,data=[host1,0.75,]]"
        )

    def test_str_without_stream_id(self):
        assert str(StreamEvent(None, 0, [])) == "StreamEvent[stream=NULL,timestamp=1970-01-01 00:00:00,000,data=[]]"

    def test_human_timestamp_is_utc(self):
        assert StreamEvent("s", 86_400_000, []).human_timestamp() == "1970-01-02 00:00:00,000"


class TestStreamEventCopy:
    """copy, evolve and column projection."""

    def test_copy_is_equal_but_distinct(self):
        event = StreamEvent("s", 10, ["a"])
        copied = event.copy()
        assert copied == event
        assert copied is not event

    def test_evolve(self):
        event = StreamEvent("s", 10, ["a"])
        moved = event.evolve(timestamp=20)
        assert moved.timestamp == 20
        assert event.timestamp == 10
        assert moved.data == event.data

    def test_select_columns(self):
        event = StreamEvent("s", 10, ["host1", "cpu", 0.5])
        index = {"host": 0, "metric": 1, "value": 2}
        assert event.select(["value", "host"], index) == (0.5, "host1")

    def test_select_unknown_column(self):
        with pytest.raises(KeyError):
            StreamEvent("s", 10, ["a"]).select(["missing"], {"host": 0})
