import pytest

from range_config import clear_current_session, reset_config
from rate_curve import Curve, CurvePoint


@pytest.fixture(autouse=True)
def default_config():
    # Every test starts from the model defaults
    reset_config()
    clear_current_session()
    yield
    reset_config()
    clear_current_session()


@pytest.fixture
def lend_curve():
    knots = [(0, 45), (900000, 19), (3400000, 35), (3900000, 45)]
    return Curve(side='lend', points=[CurvePoint(amount=a, apr=r) for a, r in knots])
