"""Tests for field rendering."""

import json

import pytest

from riemann_fs.errors import FieldNotFound, NotFound
from riemann_fs.models import EVENT_FIELDS, Event
from riemann_fs.render import event_to_dict, value_for_field


class TestFixedFields:
    """Tests for formatting of the eight fixed fields."""

    def test_tags_joined(self):
        event = Event(tags=("a", "b"))
        assert value_for_field(event, "Tags") == b"a, b"

    def test_no_tags_is_empty(self):
        assert value_for_field(Event(), "Tags") == b""

    def test_time_is_integer(self):
        assert value_for_field(Event(time=42), "Time") == b"42"

    def test_metric_six_decimals(self):
        assert value_for_field(Event(metric=0.5), "Metric") == b"0.500000"

    def test_ttl_six_decimals(self):
        assert value_for_field(Event(ttl=60), "Ttl") == b"60.000000"

    @pytest.mark.parametrize("name,attr", [
        ("Host", "host"), ("Service", "service"),
        ("Description", "description"), ("State", "state"),
    ])
    def test_strings_raw(self, name, attr):
        event = Event(**{attr: "värde ok"})
        assert value_for_field(event, name) == "värde ok".encode("utf-8")

    def test_large_integer_metric_exact(self):
        event = Event.from_dict({"metric_sint64": 123456789, "metric_f": 123456792.0})
        assert value_for_field(event, "Metric") == b"123456789.000000"
        assert json.loads(value_for_field(event, ".json"))["Metric"] == 123456789


class TestNonFiniteNumbers:
    """NaN and infinities in Metric and Ttl."""

    @pytest.mark.parametrize("value,text", [
        (float("inf"), b"+Inf"),
        (float("-inf"), b"-Inf"),
        (float("nan"), b"NaN"),
    ])
    def test_field_text(self, value, text):
        assert value_for_field(Event(metric=value), "Metric") == text
        assert value_for_field(Event(ttl=value), "Ttl") == text

    def test_json_stays_valid(self):
        event = Event(metric=float("nan"), ttl=float("inf"))
        raw = value_for_field(event, ".json")
        assert b"NaN" not in raw and b"Infinity" not in raw
        data = json.loads(raw)
        assert data["Metric"] is None
        assert data["Ttl"] is None


class TestAttributes:

    def test_attribute_verbatim(self, disk_event):
        assert value_for_field(disk_event, "mount") == b"/var"

    def test_attribute_takes_priority_over_fixed_field(self):
        event = Event(state="ok", attributes={"State": "overridden"})
        assert value_for_field(event, "State") == b"overridden"


class TestJson:
    """Tests for the .json full-event file."""

    def test_json_keys_and_types(self, disk_event):
        data = json.loads(value_for_field(disk_event, ".json"))
        assert list(data) == list(EVENT_FIELDS) + ["Attributes"]
        assert data["Host"] == "db1"
        assert data["Time"] == 1700000000
        assert data["Tags"] == ["prod", "storage"]
        assert data["Metric"] == 81.25
        assert data["Ttl"] == 60.0
        assert data["Attributes"] == {"mount": "/var", "device": "sda1"}

    def test_event_to_dict_copies_attributes(self, disk_event):
        data = event_to_dict(disk_event)
        data["Attributes"]["mount"] = "changed"
        assert disk_event.attributes["mount"] == "/var"


class TestUnknownField:

    def test_raises_field_not_found(self):
        with pytest.raises(FieldNotFound):
            value_for_field(Event(), "NoSuchField")

    def test_field_names_are_case_sensitive(self):
        with pytest.raises(FieldNotFound):
            value_for_field(Event(), "metric")

    def test_field_not_found_is_not_found(self):
        assert issubclass(FieldNotFound, NotFound)
