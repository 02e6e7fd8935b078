"""
Typed index tests
=================

Validity, ordering, offsets, and the separation between index kinds.
"""

import numpy as np
import pytest

from hemesh.index import VertexIndex, HalfedgeIndex, FaceIndex, EdgeIndex


KINDS = [VertexIndex, HalfedgeIndex, FaceIndex, EdgeIndex]


@pytest.mark.parametrize('kind', KINDS)
def test_default_is_invalid(kind):
    idx = kind()

    assert not idx.valid
    assert not idx
    assert idx.idx is None
    assert idx == kind.invalid()
    assert repr(idx) == f'{kind.__name__}()'


@pytest.mark.parametrize('kind', KINDS)
def test_valid_index(kind):
    idx = kind(5)

    assert idx.valid
    assert idx.idx == 5
    assert int(idx) == 5
    assert repr(idx) == f'{kind.__name__}(5)'


def test_zero_is_valid():
    assert VertexIndex(0).valid
    assert bool(VertexIndex(0))


def test_numpy_integer_accepted():
    assert FaceIndex(np.int64(3)) == FaceIndex(3)


def test_negative_rejected():
    with pytest.raises(ValueError):
        VertexIndex(-1)


@pytest.mark.parametrize('value', [1.0, '1', True, FaceIndex(1)])
def test_non_integer_rejected(value):
    with pytest.raises(TypeError):
        VertexIndex(value)


def test_kinds_never_equal():
    assert VertexIndex(1) != FaceIndex(1)
    assert not (VertexIndex(1) == HalfedgeIndex(1))
    assert VertexIndex() != EdgeIndex()
    assert VertexIndex(1) != 1


def test_cross_kind_ordering_raises():
    with pytest.raises(TypeError):
        VertexIndex(1) < FaceIndex(2)


def test_ordering_puts_invalid_last():
    items = [VertexIndex(), VertexIndex(2), VertexIndex(0)]

    assert sorted(items) == [VertexIndex(0), VertexIndex(2), VertexIndex()]
    assert VertexIndex(7) < VertexIndex()
    assert VertexIndex(3) <= VertexIndex(3)
    assert VertexIndex(4) > VertexIndex(3)
    assert VertexIndex() >= VertexIndex(100)


def test_hash_distinguishes_kinds():
    table = {VertexIndex(1): 'v', FaceIndex(1): 'f'}

    assert table[VertexIndex(1)] == 'v'
    assert table[FaceIndex(1)] == 'f'
    assert len({HalfedgeIndex(2), HalfedgeIndex(2)}) == 1


def test_offset_by_integer():
    h = HalfedgeIndex(4)

    assert h + 1 == HalfedgeIndex(5)
    assert 2 + h == HalfedgeIndex(6)
    assert h - 4 == HalfedgeIndex(0)
    assert h + (-1) == HalfedgeIndex(3)
    assert h.succ() == HalfedgeIndex(5)
    assert h.pred() == HalfedgeIndex(3)


def test_offset_below_zero_is_invalid():
    assert not (VertexIndex(0) - 1).valid
    assert not VertexIndex(0).pred().valid


def test_offset_of_invalid_stays_invalid():
    assert not (EdgeIndex() + 1).valid
    assert not EdgeIndex().succ().valid


@pytest.mark.parametrize('other', [FaceIndex(1), VertexIndex(1), True, 1.5])
def test_arithmetic_does_not_mix_kinds(other):
    with pytest.raises(TypeError):
        VertexIndex(1) + other

    with pytest.raises(TypeError):
        VertexIndex(1) - other


def test_index_addresses_sequences():
    names = ['a', 'b', 'c']
    points = np.arange(9).reshape(3, 3)

    assert names[VertexIndex(1)] == 'b'
    assert points[VertexIndex(2)].tolist() == [6, 7, 8]


def test_invalid_index_cannot_address():
    with pytest.raises(ValueError):
        ['a'][VertexIndex()]

    with pytest.raises(ValueError):
        int(FaceIndex())


def test_immutable():
    with pytest.raises(AttributeError):
        VertexIndex(1).foo = 2
