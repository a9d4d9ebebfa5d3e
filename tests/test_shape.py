import numpy as np
import pytest

from weft_errors import DomainError, WeftError
from weft_shape import Shape


@pytest.mark.parametrize(
    "start, end, interval, count",
    [
        (-1.5, 9, 0.5, 22),
        (-3, -2, 0.5, 3),
        (0, 1, 0.1, 11),
        (380, 780, 5, 81),
        (5, 5, 1, 1),
    ],
)
def test_count(start, end, interval, count):
    assert Shape(start, end, interval).count == count


@pytest.mark.parametrize("start, end, interval", [(-0.5, 0.4, 0.1), (-3, 15, 0.3), (0, 1, 0.1)])
def test_valid_shapes_absorb_floating_remainders(start, end, interval):
    Shape(start, end, interval)


@pytest.mark.parametrize(
    "start, end, interval",
    [(10, 5, 1), (2, 5, 2), (2, 5.1, 1), (2, 5, 0), (2, 5, -0.1)],
)
def test_invalid_shapes(start, end, interval):
    with pytest.raises(DomainError):
        Shape(start, end, interval)


@pytest.mark.parametrize(
    "start, end, interval",
    [(float("nan"), 5, 1), (0, float("inf"), 1), (0, 5, float("nan")), (float("-inf"), 5, 1)],
)
def test_non_finite_shapes(start, end, interval):
    with pytest.raises(DomainError, match="finite"):
        Shape(start, end, interval)


def test_domain_errors_are_value_errors():
    with pytest.raises(ValueError):
        Shape(10, 5, 1)
    assert issubclass(DomainError, WeftError)


def test_domain_constructor_matches_positional():
    a = Shape((-1.5, 9), 0.5)
    b = Shape(-1.5, 9, 0.5)
    assert a == b
    assert hash(a) == hash(b)
    assert a.domain() == (-1.5, 9.0)
    assert a.span == a.domain()


def test_malformed_domain_pair():
    with pytest.raises(DomainError):
        Shape((1, 2, 3), 1)


def test_is_in_domain_is_inclusive():
    shape = Shape(-1.5, 9, 0.5)
    assert shape.is_in_domain(-1.5)
    assert shape.is_in_domain(9)
    assert shape.is_in_domain(3.3)
    assert not shape.is_in_domain(-1.6)
    assert not shape.is_in_domain(9.01)
    assert 0 in shape
    assert 10 not in shape


def test_wavelengths():
    shape = Shape(0, 1, 0.25)
    assert list(shape.wavelengths()) == [0, 0.25, 0.5, 0.75, 1]
    np.testing.assert_allclose(shape.wavelength_array(), [0, 0.25, 0.5, 0.75, 1])
    assert shape.map_wavelengths(lambda w: 2 * w) == [0, 0.5, 1, 1.5, 2]


def test_to_array_domain():
    shape = Shape(400, 700, 10)
    assert shape.to_array_domain(455) == pytest.approx(5.5)
    assert shape.to_array_domain(390) == pytest.approx(-1)
    np.testing.assert_allclose(shape.to_array_domain([400, 410, 705]), [0, 1, 30.5])


def test_shape_is_immutable():
    shape = Shape(0, 10, 1)
    with pytest.raises(AttributeError):
        shape.start = 1
    with pytest.raises(AttributeError):
        shape._interval = 2
    assert shape.interval == 1


def test_repr_mentions_count():
    assert "count=11" in repr(Shape(0, 10, 1))
