import pytest

from ot_core.writer import write


@pytest.fixture
def make_ot(tmp_path):
    """Write a .ot file under tmp_path and return its path."""
    def _make(name="name.ot", **fields):
        return write(tmp_path / name, **fields)
    return _make
