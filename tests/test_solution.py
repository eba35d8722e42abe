"""Tests for solution records."""
import pytest
import autograd.numpy as np

from bcps import DecodeError, Encoded, Solution, decode_knowledge


def test_solution_fields():
    sol = Solution([0.0, 1.0, 0.5], 12.5)
    assert sol.size == 3
    assert len(sol) == 3
    assert np.array_equal(sol.values, [0.0, 1.0, 0.5])
    assert np.array_equal(sol.indices, [0, 1, 2])
    assert sol.quality == 12.5


def test_solution_is_immutable():
    sol = Solution([1.0, 2.0], 3.0)
    with pytest.raises(ValueError):
        sol.values[0] = 5.0
    with pytest.raises(AttributeError):
        sol.quality = 1.0


def test_solution_copies_input():
    values = np.array([1.0, 2.0])
    sol = Solution(values)
    values[0] = 9.0
    assert sol.values[0] == 1.0


def test_solution_round_trip():
    sol = Solution([0.0, 1.0, 0.5], 12.5)
    decoded = Solution.decode(Encoded.unpack(sol.encode().pack()))
    assert decoded.size == 3
    assert np.array_equal(decoded.values, [0.0, 1.0, 0.5])
    assert decoded.quality == 12.5


def test_solution_wire_layout():
    encoded = Solution([0.0, 1.0, 0.5], 12.5).encode()
    assert encoded.size == 4 + 3 * 8 + 8
    encoded.rewind()
    assert encoded.read_int() == 3
    assert np.array_equal(encoded.read_raw(3), [0.0, 1.0, 0.5])
    assert encoded.read_double() == 12.5
    assert encoded.remaining == 0


def test_registry_decodes_solution():
    decoded = decode_knowledge(Encoded.unpack(Solution([4.0], -1.0).encode().pack()))
    assert isinstance(decoded, Solution)
    assert decoded.quality == -1.0


def test_empty_solution_round_trip():
    decoded = Solution.decode(Encoded.unpack(Solution().encode().pack()))
    assert decoded.size == 0
    assert decoded.quality == 0.0


def test_truncated_solution():
    blob = Solution([1.0, 2.0, 3.0], 1.0).encode().pack()
    with pytest.raises(DecodeError):
        Solution.decode(Encoded.unpack(blob[:-10]))


def test_select_nonzeros():
    sol = Solution([0.0, 1e-9, 2.0], 7.0)
    nz = sol.select_nonzeros(1e-6)
    assert nz.size == 1
    assert np.array_equal(nz.values, [2.0])
    assert np.array_equal(nz.indices, [2])
    assert nz.quality == 7.0
    assert nz.value_of(2) == 2.0
    assert nz.value_of(0) == 0.0


def test_select_fractional():
    sol = Solution([1.0, 1.5, 2.0])
    frac = sol.select_fractional(1e-6)
    assert np.array_equal(frac.values, [1.5])
    assert np.array_equal(frac.indices, [1])


def test_selection_preserves_order():
    sol = Solution([0.3, 4.0, 0.0, 2.7, -0.5])
    frac = sol.select_fractional(1e-6)
    assert np.array_equal(frac.values, [0.3, 2.7, -0.5])
    assert np.array_equal(frac.indices, [0, 3, 4])


def test_empty_selection():
    sol = Solution([0.0, 1.0, 2.0])
    assert sol.select_fractional(1e-6).size == 0
    assert Solution([0.0, 0.0]).select_nonzeros(1e-6).size == 0


def test_mismatched_indices():
    with pytest.raises(ValueError):
        Solution([1.0, 2.0], indices=[0])
