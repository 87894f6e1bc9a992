import pytest

from config import DisplayMode
from rational import NEG_INF, POS_INF, Rational

SAMPLES = [
    Rational(0),
    Rational(7),
    Rational(-7),
    Rational(1, 2),
    Rational(-1, 2),
    Rational(3, 2),
    Rational(-3, 2),
    Rational(22, 7),
    Rational(-355, 113),
    Rational(1000001, 1000),
]


@pytest.mark.parametrize("mode", list(DisplayMode))
@pytest.mark.parametrize("value", SAMPLES, ids=repr)
def test_render_then_parse_is_identity(value, mode):
    assert Rational.parse(value.to_string(mode)) == value


@pytest.mark.parametrize("value", [POS_INF, NEG_INF])
def test_infinities_round_trip(value):
    assert Rational.parse(str(value)) == value
