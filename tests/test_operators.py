import numpy as np
import pytest

from weft_errors import ValidationError
from weft_operators import add, apply_to_samples, divide, multiply, subtract, zip_samples

OPERANDS = [(1, 2), ([1, 3], 2), (4, [-1, 3]), ([1, 3], [4, 4])]

CASES = {
    add: [3, [3, 5], [3, 7], [5, 7]],
    subtract: [-1, [-1, 1], [5, 1], [-3, -1]],
    multiply: [2, [2, 6], [-4, 12], [4, 12]],
    divide: [0.5, [0.5, 1.5], [-4, 4 / 3], [0.25, 0.75]],
}


@pytest.mark.parametrize(
    "op, a, b, expected",
    [
        (op, a, b, expected)
        for op, results in CASES.items()
        for (a, b), expected in zip(OPERANDS, results)
    ],
)
def test_broadcasting(op, a, b, expected):
    np.testing.assert_allclose(op(a, b), expected)


def test_scalar_result_is_float():
    result = add(1, 2)
    assert isinstance(result, float)
    assert result == 3


def test_channel_mismatch():
    with pytest.raises(ValidationError):
        add([1, 2], [1, 2, 3])
    with pytest.raises(ValidationError):
        add([1], [1, 2])


def test_nested_value_rejected():
    with pytest.raises(ValidationError):
        multiply([[1, 2]], 2)


def test_apply_to_scalar_samples():
    samples = np.array([1.0, 2.0, 4.0])
    np.testing.assert_allclose(apply_to_samples(np.add, samples, 1), [2, 3, 5])
    np.testing.assert_allclose(
        apply_to_samples(np.subtract, samples, 1, reflected=True), [0, -1, -3]
    )
    np.testing.assert_allclose(
        apply_to_samples(np.multiply, samples, [1, 10]), [[1, 10], [2, 20], [4, 40]]
    )


def test_apply_to_vector_samples():
    samples = np.array([[1.0, 2.0], [3.0, 4.0]])
    np.testing.assert_allclose(apply_to_samples(np.true_divide, samples, 2), [[0.5, 1], [1.5, 2]])
    np.testing.assert_allclose(apply_to_samples(np.add, samples, [10, 20]), [[11, 22], [13, 24]])
    with pytest.raises(ValidationError):
        apply_to_samples(np.add, samples, [1, 2, 3])


def test_zip_samples():
    scalar = np.array([1.0, 2.0])
    vector = np.array([[1.0, 2.0], [3.0, 4.0]])
    np.testing.assert_allclose(zip_samples(np.add, scalar, scalar), [2, 4])
    np.testing.assert_allclose(zip_samples(np.multiply, scalar, vector), [[1, 2], [6, 8]])
    np.testing.assert_allclose(zip_samples(np.subtract, vector, scalar), [[0, 1], [1, 2]])
    with pytest.raises(ValidationError):
        zip_samples(np.add, scalar, np.array([1.0, 2.0, 3.0]))
    with pytest.raises(ValidationError):
        zip_samples(np.add, vector, np.ones((2, 3)))
