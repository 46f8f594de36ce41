import io

import pytest

from peasantquest.mapfile import MapReadError, iter_lines, read_map, split_rows


def test_iter_lines_text_stream():
    stream = io.StringIO("ab\ncd\n\nef")
    assert list(iter_lines(stream)) == ["ab\n", "cd\n", "\n", "ef"]


def test_iter_lines_binary_stream():
    stream = io.BytesIO(b"11\n1P\n")
    assert list(iter_lines(stream)) == [b"11\n", b"1P\n"]


def test_iter_lines_empty_stream():
    assert list(iter_lines(io.StringIO(""))) == []


def test_iter_lines_keeps_carriage_returns():
    assert list(iter_lines(io.BytesIO(b"a\r\nb"))) == [b"a\r\n", b"b"]


def test_iter_lines_line_longer_than_buffer():
    text = "x" * 2500 + "\n" + "y" * 10
    lines = list(iter_lines(io.StringIO(text)))
    assert lines == ["x" * 2500 + "\n", "y" * 10]
    assert "".join(lines) == text


def test_iter_lines_many_lines_round_trip():
    text = "".join(f"row{n}\n" for n in range(700))
    lines = list(iter_lines(io.StringIO(text)))
    assert len(lines) == 700
    assert all(line.endswith("\n") for line in lines)
    assert "".join(lines) == text


def test_split_rows_drops_empty():
    assert split_rows("11\n\n1P\n") == ["11", "1P"]


def test_split_rows_empty_text():
    assert split_rows("") == []
    assert split_rows("\n\n") == []


def test_read_map_round_trip(tmp_path):
    text = "1111\n1PCE\n1111\n"
    path = tmp_path / "level.ber"
    path.write_bytes(text.encode("ascii"))
    assert read_map(path) == text
    assert split_rows(read_map(path)) == ["1111", "1PCE", "1111"]


def test_read_map_empty_file(tmp_path):
    path = tmp_path / "empty.ber"
    path.write_bytes(b"")
    with pytest.raises(MapReadError):
        read_map(path)


def test_read_map_missing_file(tmp_path):
    with pytest.raises(MapReadError):
        read_map(tmp_path / "absent.ber")