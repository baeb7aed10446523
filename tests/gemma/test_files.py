import pytest

from gemma.errors import FileAccessError
from gemma.files import read_json_file, read_text_file, write_output


def test_read_text_file_missing_names_the_label(tmp_path):
    with pytest.raises(FileAccessError, match="prompt file") as exc:
        read_text_file(str(tmp_path / "nope.txt"), "prompt")
    assert exc.value.stage == "io"


def test_read_json_file_leaves_decode_errors_to_caller(write_file):
    path = write_file("schema.json", "{not json")
    with pytest.raises(ValueError):
        read_json_file(path, "schema")


def test_write_output_overwrites_and_creates_dirs(tmp_path):
    out = tmp_path / "nested" / "out.json"
    write_output("first, and longer", str(out))
    write_output("second", str(out))
    assert out.read_text(encoding="utf-8") == "second"


def test_write_output_failure_is_file_access_error(tmp_path):
    with pytest.raises(FileAccessError):
        write_output("x", str(tmp_path))
