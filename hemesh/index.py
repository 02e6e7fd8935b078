# Copyright 2024, m3shware
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
# IN THE SOFTWARE.

""" Typed mesh item indices.

Vertices, halfedges, faces, and edges of a :class:`~hemesh.hds.HalfedgeMesh`
are addressed by plain integer positions into its connectivity tables. To
avoid mixing up positions that refer to different tables, each item kind
is given its own index type:

.. table::
   :width: 100%
   :widths: 25, 75

   ===================== ==============================================
   :class:`VertexIndex`   position in the vertex table
   --------------------- ----------------------------------------------
   :class:`HalfedgeIndex` position in the halfedge table
   --------------------- ----------------------------------------------
   :class:`FaceIndex`     position in the face table
   --------------------- ----------------------------------------------
   :class:`EdgeIndex`     pair of halfedges ``2k`` and ``2k + 1``
   ===================== ==============================================

Index objects are immutable and hashable. An index constructed without an
argument is **invalid**, it does not refer to any mesh item. Indices of
different kinds never compare equal and cannot be ordered against each
other. Arithmetic is restricted to offsetting an index by a plain integer.

>>> v = VertexIndex(3)
>>> v + 1
VertexIndex(4)
>>> v == FaceIndex(3)
False
>>> VertexIndex().valid
False
"""

import numbers


class _Index:
    """ Index base class.

    Parameters
    ----------
    idx : int, optional
        Non-negative table position. Omitting it (or passing :obj:`None`)
        creates an invalid index.

    Raises
    ------
    TypeError
        If `idx` is not an integer. In particular, an index of another
        kind is not accepted.
    ValueError
        If `idx` is negative.
    """

    __slots__ = ('_idx',)

    def __init__(self, idx=None):
        if idx is not None:
            if isinstance(idx, (_Index, bool)) or \
                    not isinstance(idx, numbers.Integral):
                msg = (f'{type(self).__name__} requires an integer, ' +
                       f'got {type(idx).__name__}')
                raise TypeError(msg)

            idx = int(idx)

            if idx < 0:
                raise ValueError(f'index must be non-negative, got {idx}')

        self._idx = idx

    @classmethod
    def invalid(cls):
        """ Invalid index.

        Returns
        -------
        _Index
            An index of the same kind that does not refer to any item.
        """
        return cls()

    @classmethod
    def _from_raw(cls, raw):
        # Connectivity tables use negative entries as storage sentinel.
        raw = int(raw)
        return cls(raw) if raw >= 0 else cls()

    def __repr__(self):
        if self._idx is None:
            return f'{type(self).__name__}()'

        return f'{type(self).__name__}({self._idx})'

    def __str__(self):
        return '-' if self._idx is None else str(self._idx)

    def __index__(self):
        """ Table position.

        Valid indices can be used directly as list and array indices.

        Raises
        ------
        ValueError
            For an invalid index.

        Returns
        -------
        int
            Table position.
        """
        if self._idx is None:
            raise ValueError(f'{type(self).__name__} is invalid')

        return self._idx

    def __int__(self):
        return self.__index__()

    def __bool__(self):
        return self._idx is not None

    def __hash__(self):
        return hash((type(self).__name__, self._idx))

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return self._idx == other._idx

    def __ne__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return self._idx != other._idx

    # Invalid indices sort after all valid ones. This mirrors an invalid
    # index being the largest representable table position.
    def _key(self):
        return (self._idx is None, self._idx or 0)

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return self._key() < other._key()

    def __le__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return self._key() <= other._key()

    def __gt__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return self._key() > other._key()

    def __ge__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return self._key() >= other._key()

    def __add__(self, n):
        """ Offset by a signed integer.

        Offsetting an invalid index, or moving a valid index below zero,
        results in an invalid index.
        """
        if isinstance(n, (_Index, bool)) or \
                not isinstance(n, numbers.Integral):
            return NotImplemented

        if self._idx is None or self._idx + n < 0:
            return type(self)()

        return type(self)(self._idx + int(n))

    __radd__ = __add__

    def __sub__(self, n):
        if isinstance(n, (_Index, bool)) or \
                not isinstance(n, numbers.Integral):
            return NotImplemented

        return self.__add__(-int(n))

    @property
    def idx(self):
        """ Table position.

        :type: int or None
        """
        return self._idx

    @property
    def valid(self):
        """ Validity flag.

        :type: bool
        """
        return self._idx is not None

    def succ(self):
        """ Next index of the same kind.

        Returns
        -------
        _Index
            The index ``self + 1``.
        """
        return self + 1

    def pred(self):
        """ Previous index of the same kind.

        Returns
        -------
        _Index
            The index ``self - 1``, invalid for position zero.
        """
        return self - 1


class VertexIndex(_Index):
    """ Vertex index.
    """

    __slots__ = ()


class HalfedgeIndex(_Index):
    """ Halfedge index.

    Halfedges are allocated in pairs. The halfedges ``2k`` and ``2k + 1``
    are opposite to each other and together form edge ``k``.
    """

    __slots__ = ()


class FaceIndex(_Index):
    """ Face index.
    """

    __slots__ = ()


class EdgeIndex(_Index):
    """ Edge index.

    Edges are not stored explicitly. Edge ``k`` is the pair of halfedges
    ``2k`` and ``2k + 1``.
    """

    __slots__ = ()
