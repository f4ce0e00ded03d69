"""Unit tests for dotted-key helpers."""

from src.features.config.keys import get_value, list_keys


CONFIG = {
    "project": {"name": "demo", "version": "1.0.0"},
    "paths": {"input_dir": "in", "nested": {"deep": True}},
    "tags": ["a", "b"],
    "empty": {},
}


class TestListKeys:
    """Tests for list_keys."""

    def test_lists_leaf_keys_sorted(self) -> None:
        """Nested tables are flattened into sorted dotted keys."""
        assert list_keys(CONFIG) == [
            "empty",
            "paths.input_dir",
            "paths.nested.deep",
            "project.name",
            "project.version",
            "tags",
        ]

    def test_empty_mapping(self) -> None:
        """An empty configuration has no keys."""
        assert list_keys({}) == []


class TestGetValue:
    """Tests for get_value."""

    def test_nested_value(self) -> None:
        """Dotted keys walk nested tables."""
        assert get_value(CONFIG, "project.name") == "demo"
        assert get_value(CONFIG, "paths.nested.deep") is True

    def test_table_value(self) -> None:
        """A key naming a table returns the whole table."""
        assert get_value(CONFIG, "project") == {"name": "demo", "version": "1.0.0"}

    def test_missing_key(self) -> None:
        """Missing segments return None."""
        assert get_value(CONFIG, "project.missing") is None
        assert get_value(CONFIG, "nope") is None

    def test_descending_into_scalar(self) -> None:
        """Walking past a scalar returns None instead of failing."""
        assert get_value(CONFIG, "project.name.first") is None
        assert get_value(CONFIG, "tags.0") is None
