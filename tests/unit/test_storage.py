import os
import stat

import pytest
from vectorfloat.services.storage import StorageError, read_rows, write_rows
from vectorfloat.services.vector import VectorFloat


def test_save_load_round_trip_is_exact(tmp_path):
    values = [0.1, -2.5e-300, 1 / 3, 123456789.123456789, 0.0]
    path = tmp_path / "data.csv"
    assert VectorFloat.from_values(values).save(path)
    assert path.read_text() == "".join(f"{v!r}\n" for v in values)
    loaded = VectorFloat()
    assert loaded.load(path)
    assert loaded.to_list() == values


def test_save_with_columns_and_custom_separator(tmp_path):
    path = tmp_path / "grid.txt"
    vec = VectorFloat.from_values([1, 2, 3, 4, 5, 6])
    assert vec.save(path, separator=";", columns=3)
    assert path.read_text() == "1.0;2.0;3.0\n4.0;5.0;6.0\n"
    loaded = VectorFloat()
    assert loaded.load(path, separator=";")
    assert loaded == vec


def test_save_rejects_uneven_rows_and_empty_vector(tmp_path):
    path = tmp_path / "out.csv"
    assert not VectorFloat(5).save(path, columns=2)
    assert not VectorFloat().save(path)
    assert not path.exists()


def test_save_failure_keeps_existing_file(tmp_path):
    missing_dir = tmp_path / "nope" / "out.csv"
    assert not VectorFloat(2).save(missing_dir)
    assert not missing_dir.exists()


def test_write_rows_replaces_target(tmp_path):
    path = tmp_path / "rows.csv"
    path.write_text("old\n")
    write_rows(path, [[1.0, 2.0]])
    assert path.read_text() == "1.0,2.0\n"
    assert [p.name for p in tmp_path.iterdir()] == ["rows.csv"]


def test_load_mismatched_field_counts_fails(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("1,2,3\n4,5\n")
    vec = VectorFloat.from_values([9])
    assert not vec.load(path)
    assert vec == [9.0]
    with pytest.raises(StorageError, match="expected 3 fields"):
        read_rows(path)


@pytest.mark.parametrize("content", ["", "\n\n", "1,abc\n", "1,,2\n"])
def test_load_malformed_or_empty_file_fails(tmp_path, content):
    path = tmp_path / "bad.csv"
    path.write_text(content)
    vec = VectorFloat(1, 3.0)
    assert not vec.load(path)
    assert vec == [3.0]


def test_load_missing_file_fails(tmp_path):
    assert not VectorFloat().load(tmp_path / "missing.csv")


def test_read_rows_accepts_crlf_blank_lines_and_padding(tmp_path):
    path = tmp_path / "win.csv"
    path.write_bytes(b"1, 2\r\n\r\n 3 ,4\r\n")
    assert read_rows(path) == [[1.0, 2.0], [3.0, 4.0]]


def test_load_flattens_rows_in_order(tmp_path):
    path = tmp_path / "grid.csv"
    path.write_text("1\t2\n3\t4\n")
    vec = VectorFloat()
    assert vec.load(path, separator="\t")
    assert vec == [1.0, 2.0, 3.0, 4.0]


@pytest.mark.parametrize("separator", ["", ",,", "\n"])
def test_invalid_separator_raises(tmp_path, separator):
    with pytest.raises(ValueError):
        read_rows(tmp_path / "x.csv", separator)


def _umask():
    mask = os.umask(0)
    os.umask(mask)
    return mask


def test_save_new_file_uses_default_mode(tmp_path):
    path = tmp_path / "a.csv"
    assert VectorFloat(2).save(path)
    assert stat.S_IMODE(path.stat().st_mode) == 0o666 & ~_umask()


def test_save_keeps_existing_file_mode(tmp_path):
    path = tmp_path / "a.csv"
    path.write_text("1.0\n")
    os.chmod(path, 0o640)
    assert VectorFloat(2).save(path)
    assert stat.S_IMODE(path.stat().st_mode) == 0o640
    assert path.read_text() == "0.0\n0.0\n"
