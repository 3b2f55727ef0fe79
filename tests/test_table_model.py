import pandas as pd
import pytest

from models.table_model import ColumnKind, FilterSpec, SortDirection, TableData


def test_default_kinds_int_then_text():
    table = TableData(["id", "a", "b"], rows=[[1, "x", "y"]])

    assert table.kinds == [ColumnKind.INT, ColumnKind.TEXT, ColumnKind.TEXT]
    assert table.kind_of("id") is ColumnKind.INT
    assert table.kind_of("b") is ColumnKind.TEXT


def test_row_arity_must_match_columns():
    with pytest.raises(ValueError):
        TableData(["id", "name"], rows=[[1, "Alice", "extra"]])


def test_frame_columns_must_match():
    frame = pd.DataFrame({"id": [1], "other": ["x"]})

    with pytest.raises(ValueError):
        TableData(["id", "name"], frame=frame)


def test_rows_return_plain_python_values():
    table = TableData(["id", "name"], rows=[[5, "Eve"]])

    row = table.rows[0]
    assert type(row[0]) is int
    assert row == [5, "Eve"]


def test_copy_is_independent():
    table = TableData(["id", "name"], rows=[[1, "a"], [2, "b"]])
    clone = table.copy()

    clone.frame.loc[0, "name"] = "changed"

    assert table.rows == [[1, "a"], [2, "b"]]
    assert clone != table


def test_column_index_unknown_raises_key_error():
    table = TableData(["id"], rows=[[1]])

    with pytest.raises(KeyError):
        table.column_index("nope")


def test_empty_table_keeps_schema():
    table = TableData(["id", "name"], rows=[])

    assert table.row_count == 0
    assert table.columns == ["id", "name"]


def test_sort_direction_toggles():
    assert SortDirection.ASCENDING.toggled() is SortDirection.DESCENDING
    assert SortDirection.DESCENDING.toggled() is SortDirection.ASCENDING


def test_filter_spec_active_only_with_text():
    assert FilterSpec("name", "a").is_active
    assert not FilterSpec("name", "").is_active
