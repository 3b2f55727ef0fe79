import pytest

from models.table_model import FilterSpec, SortDirection, SortSpec, TableData
from services.view_service import FilterError, derive_view, filter_rows, next_direction, sort_rows


def _ids(table):
    return [row[0] for row in table.rows]


def test_reset_view_equals_canonical(people):
    view = derive_view(people)

    assert view == people
    assert view is not people
    assert view.frame is not people.frame


def test_filter_keeps_matching_rows_in_order():
    table = TableData(["id", "name"], rows=[[1, "Alice"], [2, "Bob"], [3, "Carol"]])

    view = derive_view(table, filter_spec=FilterSpec("name", "o"))

    assert _ids(view) == [2, 3]


@pytest.mark.parametrize("column,text", [
    ("name", "o"), ("name", "B"), ("name", "b"), ("city", "Oslo"),
    ("id", "1"), ("id", "0"), ("city", "zzz"),
])
def test_filter_is_sound_and_complete(people, column, text):
    view = filter_rows(people, FilterSpec(column, text))
    idx = people.column_index(column)

    kept = view.rows
    dropped = [row for row in people.rows if row not in kept]

    assert all(text in str(row[idx]) for row in kept)
    assert not any(text in str(row[idx]) for row in dropped)
    assert len(kept) + len(dropped) == people.row_count


def test_filter_is_case_sensitive(people):
    view = filter_rows(people, FilterSpec("name", "bob"))

    assert _ids(view) == [10]


def test_filter_text_is_not_a_pattern():
    table = TableData(["id", "name"], rows=[[1, "a.c"], [2, "abc"], [3, "50%"], [4, "O'Neil"]])

    assert _ids(filter_rows(table, FilterSpec("name", "."))) == [1]
    assert _ids(filter_rows(table, FilterSpec("name", "%"))) == [3]
    assert _ids(filter_rows(table, FilterSpec("name", "'"))) == [4]


def test_filter_on_integer_column_matches_rendering(people):
    view = filter_rows(people, FilterSpec("id", "1"))

    assert _ids(view) == [1, 10]


def test_empty_filter_returns_full_copy(people):
    view = filter_rows(people, FilterSpec("name", ""))

    assert view == people


def test_filter_does_not_touch_canonical(people):
    before = people.rows

    derive_view(people, filter_spec=FilterSpec("city", "Oslo"))

    assert people.rows == before


def test_unknown_column_raises(people):
    with pytest.raises(FilterError):
        derive_view(people, filter_spec=FilterSpec("missing", "x"))
    with pytest.raises(FilterError):
        derive_view(people, sort_spec=SortSpec("missing"))


def test_sort_integer_column_is_numeric(people):
    view = sort_rows(people, SortSpec("id", SortDirection.ASCENDING))

    assert _ids(view) == [1, 2, 3, 10]


def test_sort_text_column_ignores_case(people):
    view = sort_rows(people, SortSpec("name", SortDirection.ASCENDING))

    # bob and Bob tie, so file order decides
    assert [row[1] for row in view.rows] == ["Alice", "bob", "Bob", "Carol"]


def test_sort_mixed_case_names():
    table = TableData(["id", "name"], rows=[[1, "bob"], [2, "Zed"], [3, "alice"], [4, "Carol"]])

    asc = sort_rows(table, SortSpec("name", SortDirection.ASCENDING))
    desc = sort_rows(table, SortSpec("name", SortDirection.DESCENDING))

    assert [row[1] for row in asc.rows] == ["alice", "bob", "Carol", "Zed"]
    assert [row[1] for row in desc.rows] == ["Zed", "Carol", "bob", "alice"]


def test_sort_descending_reverses_unique_column(people):
    asc = sort_rows(people, SortSpec("id", SortDirection.ASCENDING))
    desc = sort_rows(people, SortSpec("id", SortDirection.DESCENDING))

    assert _ids(desc) == list(reversed(_ids(asc)))


def test_sort_is_stable_for_ties(people):
    view = sort_rows(people, SortSpec("city", SortDirection.ASCENDING))

    assert _ids(view) == [1, 3, 10, 2]


def test_sort_does_not_touch_canonical(people):
    before = people.rows

    derive_view(people, sort_spec=SortSpec("name", SortDirection.DESCENDING))

    assert people.rows == before


def test_filter_then_sort(people):
    view = derive_view(
        people,
        filter_spec=FilterSpec("city", "Oslo"),
        sort_spec=SortSpec("id", SortDirection.DESCENDING),
    )

    assert _ids(view) == [10, 3]


def test_filter_with_no_match_keeps_schema(people):
    view = filter_rows(people, FilterSpec("name", "Zed"))

    assert view.row_count == 0
    assert view.columns == people.columns


@pytest.mark.parametrize("prev_col,prev_dir,col,expected", [
    (None, None, "id", SortDirection.ASCENDING),
    ("id", SortDirection.ASCENDING, "id", SortDirection.DESCENDING),
    ("id", SortDirection.DESCENDING, "id", SortDirection.ASCENDING),
    ("id", SortDirection.ASCENDING, "name", SortDirection.ASCENDING),
    ("name", SortDirection.DESCENDING, "id", SortDirection.ASCENDING),
])
def test_next_direction(prev_col, prev_dir, col, expected):
    assert next_direction(prev_col, prev_dir, col) is expected
