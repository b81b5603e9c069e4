"""Tests for the vector capability set."""

import pytest

from cfmm_router.errors import DivideByZero
from cfmm_router.math.fixed_decimal import FixedDecimal
from cfmm_router.math.signed_decimal import SignedDecimal
from cfmm_router.math.vector import (
    vec2norm,
    vec2norminv,
    vecadd,
    veccpy,
    vecdiff,
    vecdot,
    vecncpy,
    vecscale,
)
from tests.helpers import values


class TestVectorOps:
    """Vector helpers over SignedDecimal."""

    def test_vecadd(self):
        """vecadd returns y + c * x."""
        y = values(["1", "2"])
        x = values(["3", "-4"])
        assert vecadd(y, x, SignedDecimal.from_int(2)) == values(["7", "-6"])

    def test_vecdot(self):
        """vecdot sums elementwise products."""
        assert vecdot(values(["1", "2", "3"]), values(["4", "-5", "6"])) == SignedDecimal.from_int(12)

    def test_vecdot_empty_raises(self):
        """vecdot of empty vectors raises ValueError."""
        with pytest.raises(ValueError):
            vecdot([], [])

    def test_length_mismatch_raises(self):
        """Mismatched lengths raise ValueError."""
        with pytest.raises(ValueError):
            vecdot(values(["1"]), values(["1", "2"]))
        with pytest.raises(ValueError):
            vecdiff(values(["1"]), values(["1", "2"]))

    def test_vecscale(self):
        """vecscale multiplies every entry."""
        assert vecscale(values(["1", "-2"]), SignedDecimal.from_str("0.5")) == values(["0.5", "-1"])

    def test_copies_are_new_lists(self):
        """veccpy and vecncpy do not alias their input."""
        x = values(["1", "-2"])
        copy = veccpy(x)
        assert copy == x
        assert copy is not x
        assert vecncpy(x) == values(["-1", "2"])
        assert x == values(["1", "-2"])

    def test_vecdiff(self):
        """vecdiff returns x - y."""
        assert vecdiff(values(["5", "1"]), values(["2", "3"])) == values(["3", "-2"])

    def test_norms(self):
        """vec2norm and vec2norminv of a 3-4-5 vector."""
        x = values(["3", "-4"])
        assert vec2norm(x) == SignedDecimal.from_int(5)
        assert vec2norminv(x) == SignedDecimal.from_str("0.2")

    def test_norminv_zero_vector(self):
        """The inverse norm of the zero vector raises DivideByZero."""
        with pytest.raises(DivideByZero):
            vec2norminv(values(["0", "0"]))


class TestVectorOpsFixed:
    """The same helpers work over FixedDecimal."""

    def test_dot_and_norm(self):
        """Dot product and norm over the fixed-point backend."""
        x = values(["3", "4"], FixedDecimal)
        assert vecdot(x, x) == FixedDecimal.from_int(25)
        assert vec2norm(x) == FixedDecimal.from_int(5)
