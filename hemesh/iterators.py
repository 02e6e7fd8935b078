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

""" Combinatorial mesh item neighborhood iterators.

Neighborhood queries of a :class:`~hemesh.hds.HalfedgeMesh` return
*range* objects. A range stores its query parameters only, every call
to :func:`iter` starts a fresh, lazy traversal. Hence ranges can be
iterated over any number of times:

>>> ring = mesh.vertex_vertices(v)
>>> list(ring) == list(ring)
True

All neighborhood ranges are derived from two primitive walks: the walk
around a vertex (:class:`VertexHalfedgeRange`) and the walk around a
face (:class:`FaceHalfedgeRange`). The remaining ranges map the visited
halfedges to vertices, faces, or edges.

Note
----
A walk around a boundary vertex stops as soon as it runs off the
boundary. Depending on where the walk starts, only part of the vertex
neighborhood is visited. Walks never wrap around a boundary.

Note
----
Ranges hold a weak reference to their mesh. Iterating over a range of a
mesh that no longer exists, or of a mesh that was reset or reloaded
after the range was created, produces no items. An iteration that is
already running stops when the mesh is reset or reloaded.
"""

import weakref

from hemesh.index import VertexIndex
from hemesh.index import HalfedgeIndex
from hemesh.index import FaceIndex
from hemesh.index import EdgeIndex


# Successor of halfedge h in a walk around its origin (outgoing) or its
# target (ingoing) vertex. Keyed on (outgoing, clockwise).
_VERTEX_STEPS = {
    (False, False): lambda mesh, h: mesh.prev(mesh.opposite(h)),
    (False, True): lambda mesh, h: mesh.opposite(mesh.next(h)),
    (True, False): lambda mesh, h: mesh.opposite(mesh.prev(h)),
    (True, True): lambda mesh, h: mesh.next(mesh.opposite(h)),
}


def _check_kind(item, kind, name):
    """ Normalize optional index arguments.
    """
    if item is None:
        return kind()

    if type(item) is not kind:
        msg = (f"'{name}' has to be of type {kind.__name__}, " +
               f'got {type(item).__name__}')
        raise TypeError(msg)

    return item


def _vertex_walk(mesh, center, outgoing, clockwise, start):
    """ Halfedges around a vertex.

    Parameters
    ----------
    mesh : HalfedgeMesh
        The mesh instance.
    center : VertexIndex
        Center vertex.
    outgoing : bool
        Visit halfedges starting at (:obj:`True`) or pointing to
        (:obj:`False`) the center vertex.
    clockwise : bool
        Orientation of the walk.
    start : HalfedgeIndex
        First halfedge. Replaced by the default halfedge of the center
        vertex if it is not incident to the center in the requested way.

    Yields
    ------
    HalfedgeIndex
    """
    if not mesh._contains(center):
        return

    if outgoing:
        if mesh.source_vertex(start) != center:
            start = mesh.outgoing_halfedge(center)
    else:
        if mesh.target_vertex(start) != center:
            start = mesh.ingoing_halfedge(center)

    step = _VERTEX_STEPS[outgoing, clockwise]
    h = start

    while h.valid:
        yield h
        h = step(mesh, h)

        if h == start:
            return


def _face_walk(mesh, center, positive_order, start):
    """ Halfedges around a face.

    Parameters
    ----------
    mesh : HalfedgeMesh
        The mesh instance.
    center : FaceIndex
        Center face.
    positive_order : bool
        Follow the face orientation (:obj:`True`) or walk in reverse.
    start : HalfedgeIndex
        First halfedge. Replaced by the representative halfedge of the
        center face if it does not belong to the center face.

    Yields
    ------
    HalfedgeIndex
    """
    if not mesh._contains(center):
        return

    if mesh.halfedge_face(start) != center:
        start = mesh.face_halfedge(center)

    step = mesh.next if positive_order else mesh.prev
    h = start

    while h.valid:
        yield h
        h = step(h)

        if h == start:
            return


class _Range:
    """ Range base class.

    Parameters
    ----------
    mesh : HalfedgeMesh or None
        The mesh instance. A range without mesh is always empty.
    """

    def __init__(self, mesh):
        if mesh is None:
            self._mesh = lambda: None
            self._generation = None
        else:
            self._mesh = weakref.ref(mesh)
            self._generation = mesh._generation

    def __iter__(self):
        mesh = self._mesh()

        # The tables a range was created for are gone if the mesh has
        # been collected, reset, or reloaded.
        if mesh is None or mesh._generation != self._generation:
            return iter(())

        return self._guard(mesh, self._walk(mesh))

    def __len__(self):
        return sum(1 for _ in self)

    def __repr__(self):
        return f'{type(self).__name__}({list(self)})'

    @staticmethod
    def _guard(mesh, items):
        generation = mesh._generation

        for item in items:
            # Stop as soon as the tables change under a running walk.
            if mesh._generation != generation:
                return

            yield item

    def _walk(self, mesh):
        raise NotImplementedError


class _FlatRange(_Range):
    """ All items of one kind in order of ascending index.
    """

    _kind = None

    def __len__(self):
        mesh = self._mesh()

        if mesh is None or mesh._generation != self._generation:
            return 0

        return self._count(mesh)

    def __repr__(self):
        return f'{type(self).__name__}({len(self)})'

    def __contains__(self, item):
        return (type(item) is self._kind and item.valid and
                item.idx < len(self))

    def _walk(self, mesh):
        return (self._kind(i) for i in range(self._count(mesh)))


class VertexRange(_FlatRange):
    """ All vertices of a mesh.
    """

    _kind = VertexIndex

    @staticmethod
    def _count(mesh):
        return mesh.num_vertices()


class HalfedgeRange(_FlatRange):
    """ All halfedges of a mesh.
    """

    _kind = HalfedgeIndex

    @staticmethod
    def _count(mesh):
        return mesh.num_halfedges()


class FaceRange(_FlatRange):
    """ All faces of a mesh.
    """

    _kind = FaceIndex

    @staticmethod
    def _count(mesh):
        return mesh.num_faces()


class EdgeRange(_FlatRange):
    """ All edges of a mesh.
    """

    _kind = EdgeIndex

    @staticmethod
    def _count(mesh):
        return mesh.num_edges()


class VertexHalfedgeRange(_Range):
    """ Halfedges around a vertex.

    The primitive vertex walk. Depending on `outgoing` and `clockwise`,
    each step combines :meth:`~hemesh.hds.HalfedgeMesh.next` or
    :meth:`~hemesh.hds.HalfedgeMesh.prev` with
    :meth:`~hemesh.hds.HalfedgeMesh.opposite`:

    .. table::
       :width: 100%
       :widths: 20, 20, 60

       ========== ========= =================================
       outgoing   clockwise successor of ``h``
       ---------- --------- ---------------------------------
       False      False     ``prev(opposite(h))``
       ---------- --------- ---------------------------------
       False      True      ``opposite(next(h))``
       ---------- --------- ---------------------------------
       True       False     ``opposite(prev(h))``
       ---------- --------- ---------------------------------
       True       True      ``next(opposite(h))``
       ========== ========= =================================

    The walk ends when it returns to its first halfedge or reaches the
    boundary.

    Parameters
    ----------
    mesh : HalfedgeMesh or None
        The mesh instance.
    center : VertexIndex
        Center vertex.
    outgoing : bool
        Visit outgoing (:obj:`True`) or ingoing (:obj:`False`) halfedges.
    clockwise : bool, optional
        Orientation of the walk.
    start : HalfedgeIndex, optional
        First halfedge. Ignored unless it starts at (outgoing) or points
        to (ingoing) the center vertex.
    """

    def __init__(self, mesh, center, outgoing, clockwise=True, start=None):
        super().__init__(mesh)

        self._center = _check_kind(center, VertexIndex, 'center')
        self._outgoing = bool(outgoing)
        self._clockwise = bool(clockwise)
        self._start = _check_kind(start, HalfedgeIndex, 'start')

    def _walk(self, mesh):
        return _vertex_walk(mesh, self._center, self._outgoing,
                            self._clockwise, self._start)


class _VertexRingRange(_Range):
    """ Outgoing vertex walk mapped to neighboring items.

    Parameters
    ----------
    mesh : HalfedgeMesh or None
        The mesh instance.
    center : VertexIndex
        Center vertex.
    clockwise : bool, optional
        Orientation of the walk.
    start : optional
        First item to report. If it is not found in the neighborhood of
        the center vertex, the walk starts at its default position.

    Note
    ----
    There is no direct way to find the halfedge that leads to a given
    neighbor. Finding `start` costs one walk around the center vertex.
    """

    _kind = None

    def __init__(self, mesh, center, clockwise=True, start=None):
        super().__init__(mesh)

        self._center = _check_kind(center, VertexIndex, 'center')
        self._clockwise = bool(clockwise)
        self._start = _check_kind(start, self._kind, 'start')

    def _walk(self, mesh):
        first = HalfedgeIndex()

        if self._start.valid:
            for h in _vertex_walk(mesh, self._center, True,
                                  self._clockwise, HalfedgeIndex()):
                if self._map(mesh, h) == self._start:
                    first = h
                    break

        for h in _vertex_walk(mesh, self._center, True,
                              self._clockwise, first):
            yield self._map(mesh, h)


class VertexVertexRange(_VertexRingRange):
    """ Vertices adjacent to a vertex.

    Targets of the outgoing halfedges of the center vertex.
    """

    _kind = VertexIndex

    @staticmethod
    def _map(mesh, h):
        return mesh.target_vertex(h)


class VertexFaceRange(_VertexRingRange):
    """ Faces incident to a vertex.

    Faces of the outgoing halfedges of the center vertex. A boundary
    halfedge contributes an invalid :class:`~hemesh.index.FaceIndex`.
    """

    _kind = FaceIndex

    @staticmethod
    def _map(mesh, h):
        return mesh.halfedge_face(h)


class VertexEdgeRange(_VertexRingRange):
    """ Edges incident to a vertex.
    """

    _kind = EdgeIndex

    @staticmethod
    def _map(mesh, h):
        return mesh.halfedge_edge(h)


class FaceHalfedgeRange(_Range):
    """ Halfedges around a face.

    The primitive face walk, following :meth:`~hemesh.hds.HalfedgeMesh.next`
    (positive order) or :meth:`~hemesh.hds.HalfedgeMesh.prev` (reverse
    order) until the walk returns to its first halfedge.

    Parameters
    ----------
    mesh : HalfedgeMesh or None
        The mesh instance.
    center : FaceIndex
        Center face.
    positive_order : bool, optional
        Orientation of the walk.
    start : HalfedgeIndex, optional
        First halfedge. Ignored unless it belongs to the center face.
    """

    def __init__(self, mesh, center, positive_order=True, start=None):
        super().__init__(mesh)

        self._center = _check_kind(center, FaceIndex, 'center')
        self._positive_order = bool(positive_order)
        self._start = _check_kind(start, HalfedgeIndex, 'start')

    def _walk(self, mesh):
        return _face_walk(mesh, self._center, self._positive_order,
                          self._start)


class _FaceRingRange(_Range):
    """ Face walk mapped to incident items.

    Parameters
    ----------
    mesh : HalfedgeMesh or None
        The mesh instance.
    center : FaceIndex
        Center face.
    positive_order : bool, optional
        Orientation of the walk.
    start : optional
        First item to report. If it is not found around the center face,
        the walk starts at the representative halfedge.
    """

    _kind = None

    def __init__(self, mesh, center, positive_order=True, start=None):
        super().__init__(mesh)

        self._center = _check_kind(center, FaceIndex, 'center')
        self._positive_order = bool(positive_order)
        self._start = _check_kind(start, self._kind, 'start')

    def _walk(self, mesh):
        first = HalfedgeIndex()

        if self._start.valid:
            for h in _face_walk(mesh, self._center, self._positive_order,
                                HalfedgeIndex()):
                if self._map(mesh, h) == self._start:
                    first = h
                    break

        for h in _face_walk(mesh, self._center, self._positive_order,
                            first):
            yield self._map(mesh, h)


class FaceVertexRange(_FaceRingRange):
    """ Vertices of a face.

    Targets of the halfedges around the center face.
    """

    _kind = VertexIndex

    @staticmethod
    def _map(mesh, h):
        return mesh.target_vertex(h)


class FaceFaceRange(_FaceRingRange):
    """ Faces sharing an edge with a face.

    The face across each edge of the center face. A boundary edge
    contributes an invalid :class:`~hemesh.index.FaceIndex`.
    """

    _kind = FaceIndex

    @staticmethod
    def _map(mesh, h):
        return mesh.halfedge_face(mesh.opposite(h))


class FaceEdgeRange(_FaceRingRange):
    """ Edges of a face.
    """

    _kind = EdgeIndex

    @staticmethod
    def _map(mesh, h):
        return mesh.halfedge_edge(h)


class IncidentFaceRange:
    """ Valid faces of a face range.

    Parameters
    ----------
    rng : FaceRange or VertexFaceRange or FaceFaceRange
        The underlying range.
    """

    def __init__(self, rng):
        self._range = rng

    def __iter__(self):
        return (f for f in self._range if f.valid)

    def __len__(self):
        return sum(1 for _ in self)

    def __repr__(self):
        return f'{type(self).__name__}({list(self)})'


def verts(mesh, item=None):
    """ Vertex iterator.

    The returned range traverses vertices depending on the type of
    `item`:

    .. table::
       :width: 100%
       :widths: 25, 75

       =================== ============================================
       :class:`VertexIndex` clockwise traversal of adjacent vertices
       ------------------- --------------------------------------------
       :class:`FaceIndex`   positive order traversal of face vertices
       ------------------- --------------------------------------------
       :obj:`None`          in-order traversal of all vertices
       =================== ============================================

    Parameters
    ----------
    mesh : HalfedgeMesh
        The mesh instance.
    item : VertexIndex or FaceIndex, optional
        The base item.

    Raises
    ------
    TypeError
        For any other type of `item`.

    Returns
    -------
    VertexRange or VertexVertexRange or FaceVertexRange
    """
    if item is None:
        return VertexRange(mesh)
    elif type(item) is VertexIndex:
        return VertexVertexRange(mesh, item)
    elif type(item) is FaceIndex:
        return FaceVertexRange(mesh, item)

    raise TypeError(f'cannot visit vertices of {type(item).__name__}')


def halfs(mesh, item=None):
    """ Halfedge iterator.

    The returned range traverses halfedges depending on the type of
    `item`:

    .. table::
       :width: 100%
       :widths: 25, 75

       =================== ============================================
       :class:`VertexIndex` clockwise traversal of outgoing halfedges
       ------------------- --------------------------------------------
       :class:`FaceIndex`   positive order traversal of face halfedges
       ------------------- --------------------------------------------
       :obj:`None`          in-order traversal of all halfedges
       =================== ============================================

    Parameters
    ----------
    mesh : HalfedgeMesh
        The mesh instance.
    item : VertexIndex or FaceIndex, optional
        The base item.

    Raises
    ------
    TypeError
        For any other type of `item`.

    Returns
    -------
    HalfedgeRange or VertexHalfedgeRange or FaceHalfedgeRange
    """
    if item is None:
        return HalfedgeRange(mesh)
    elif type(item) is VertexIndex:
        return VertexHalfedgeRange(mesh, item, True)
    elif type(item) is FaceIndex:
        return FaceHalfedgeRange(mesh, item)

    raise TypeError(f'cannot visit halfedges of {type(item).__name__}')


def edges(mesh, item=None):
    """ Edge iterator.

    Same dispatch rules as :func:`verts`, visiting incident edges of a
    vertex or face, or all edges of the mesh.

    Parameters
    ----------
    mesh : HalfedgeMesh
        The mesh instance.
    item : VertexIndex or FaceIndex, optional
        The base item.

    Raises
    ------
    TypeError
        For any other type of `item`.

    Returns
    -------
    EdgeRange or VertexEdgeRange or FaceEdgeRange
    """
    if item is None:
        return EdgeRange(mesh)
    elif type(item) is VertexIndex:
        return VertexEdgeRange(mesh, item)
    elif type(item) is FaceIndex:
        return FaceEdgeRange(mesh, item)

    raise TypeError(f'cannot visit edges of {type(item).__name__}')


def faces(mesh, item=None):
    """ Face iterator.

    A vertex :math:`v` and a face :math:`f` are incident if
    :math:`v \\in f`. Two faces are incident if they share a common edge.
    Unlike the underlying ranges, this iterator **skips** the invalid
    face indices reported for boundary halfedges.

    Parameters
    ----------
    mesh : HalfedgeMesh
        The mesh instance.
    item : VertexIndex or FaceIndex, optional
        The base item.

    Raises
    ------
    TypeError
        For any other type of `item`.

    Returns
    -------
    IncidentFaceRange
    """
    if item is None:
        rng = FaceRange(mesh)
    elif type(item) is VertexIndex:
        rng = VertexFaceRange(mesh, item)
    elif type(item) is FaceIndex:
        rng = FaceFaceRange(mesh, item)
    else:
        raise TypeError(f'cannot visit faces of {type(item).__name__}')

    return IncidentFaceRange(rng)
