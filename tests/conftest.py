import pytest

from models.table_model import TableData


SAMPLE_CSV = "id,name\n1,Alice\n2,Bob\n3,Carol\n"


@pytest.fixture
def write_csv(tmp_path):
    """Factory fixture: write_csv(text, name=...) -> path of a file in tmp_path."""

    def _write(text, name="data.csv", encoding="utf-8"):
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return str(path)

    return _write


@pytest.fixture
def sample_path(write_csv):
    return write_csv(SAMPLE_CSV)


@pytest.fixture
def people():
    return TableData(
        columns=["id", "name", "city"],
        rows=[
            [3, "Carol", "Oslo"],
            [1, "Alice", "Bergen"],
            [10, "bob", "Oslo"],
            [2, "Bob", "Trondheim"],
        ],
    )
