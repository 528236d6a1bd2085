import os

import pytest

from reportgen.docs.buffer import OutputBuffer


def test_commit_moves_file_into_place(tmp_path):
    target = tmp_path / "out" / "report.pdf"
    with OutputBuffer(str(target)) as buf:
        with open(buf.path, "wb") as f:
            f.write(b"data")
        assert buf.commit() == str(target)
    assert target.read_bytes() == b"data"
    assert os.listdir(target.parent) == ["report.pdf"]


def test_exception_discards_partial_output(tmp_path):
    target = tmp_path / "report.pdf"
    with pytest.raises(RuntimeError):
        with OutputBuffer(str(target)) as buf:
            with open(buf.path, "wb") as f:
                f.write(b"half")
            raise RuntimeError("render failed")
    assert os.listdir(tmp_path) == []
