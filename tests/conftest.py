# tests/conftest.py
import pytest

from pyparsa import Config
from pyparsa.Cursor import Cursor
from pyparsa.Parser import Err, Ok


def assert_outcome_eq(res1, res2):
    """
    Deep comparison of two Outcomes.
    """
    if isinstance(res1, Ok):
        assert isinstance(res2, Ok), "Outcome mismatch: Ok vs Err"
        assert res1.value == res2.value
    else:
        assert isinstance(res2, Err), "Outcome mismatch: Err vs Ok"
        assert res1.error == res2.error
        assert res1.pos == res2.pos


@pytest.fixture
def cursor():
    def _make(text, pos=0):
        return Cursor(text, pos)

    return _make


@pytest.fixture
def settings():
    """Lets a test change the engine settings; restores them afterwards."""
    previous = Config.settings
    yield Config.configure
    Config.restore(previous)
