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

""" Halfedge data structure.

The connectivity of an orientable 2-manifold mesh (with or without
boundary) is described by three tables:

    - a vertex table holding one outgoing halfedge per vertex,
    - a halfedge table holding successor, predecessor, target vertex,
      and face of each halfedge,
    - and a face table holding one halfedge per face.

Mesh items are addressed by the typed indices of :mod:`hemesh.index`.
Halfedges are always allocated in pairs: the halfedges ``2k`` and
``2k + 1`` are opposite to each other and form edge ``k``. Halfedge
``2k`` points from the smaller to the larger vertex of the edge.

Vertex coordinates are **not** part of the data structure. They are
owned by the caller and can be addressed with vertex indices:

>>> points = np.array([[0., 0., 0.], [1., 0., 0.], [0., 1., 0.]])
>>> mesh = HalfedgeMesh(points, [[0, 1, 2]])
>>> [points[v] for v in mesh.face_vertices(mesh.face(0))]

Note
----
To ease debugging, this module relies on assertions which can slow down
script execution. You can disable assertions by running in optimized mode
via the "-O" command line argument.
"""

import logging
import numbers
import operator

from pathlib import Path

import numpy as np

import hemesh.obj as obj
import hemesh.iterators as iterators

from hemesh.index import VertexIndex
from hemesh.index import HalfedgeIndex
from hemesh.index import FaceIndex
from hemesh.index import EdgeIndex


logger = logging.getLogger(__name__)

# Storage sentinel of the connectivity tables. Never handed out, the
# query methods translate it to invalid index objects.
_NIL = -1


class HalfedgeMesh:
    """ Halfedge mesh connectivity.

    The combinatorics of a mesh can be built by reading from a file or
    by converting a sequence of vertex coordinates and a sequence of face
    definitions to its halfedge representation. Only the number of
    vertex coordinates matters, coordinates are not stored.

    Parameters
    ----------
    points : array_like or int, optional
        Vertex coordinates, or just the number of vertices.
    faces : sequence of sequences of int, optional
        Face definitions, 0-based vertex indexing.
    name : str, optional
        Name tag.

    Raises
    ------
    NonManifoldError
        When trying to initialize a mesh from non-manifold data.
    ValueError
        When face definitions are given without `points` or are
        malformed (see :meth:`load`).

    Note
    ----
    All query methods are total: an invalid or out-of-range index never
    raises but yields the invalid index of the result type. Passing an
    index of the wrong kind is a programming error and raises a
    :class:`TypeError`.
    """

    def __init__(self, points=None, faces=None, *, name=None):
        if points is None and faces is not None:
            msg = "face definitions require 'points' argument != None"
            raise ValueError(msg)

        # Incremented whenever the tables are replaced. Ranges created
        # before that point stop producing items.
        self._generation = 0
        self._allocate(0, 0, 0)

        if points is not None:
            self._build(points, [] if faces is None else faces)

        # The corresponding property setter will strip any directory
        # prefix and type suffix from the name.
        self.name = name

    def __repr__(self):
        v, e, f = self.size
        return f'HalfedgeMesh(name={self._name!r}, size=({v}, {e}, {f}))'

    def __bool__(self):
        return self.num_vertices() > 0

    @property
    def name(self):
        """ Name property.

        :type: str or None

        Note
        ----
        The stored name does not include a directory prefix or a type
        suffix.
        """
        return self._name

    @name.setter
    def name(self, value):
        self._name = value if value is None else Path(value).stem

    @property
    def size(self):
        """ Mesh size.

        The attribute value :math:`(v, e, f)` holds the number of
        vertices, the number of edges, and the number of faces.

        :type: (int, int, int)
        """
        return self.num_vertices(), self.num_edges(), self.num_faces()

    @classmethod
    def read(cls, filename, *args):
        """ Read mesh from file.

        Read mesh combinatorics (face definitions) and vertex coordinates
        from an OBJ file. Additional data is read on request.

        Parameters
        ----------
        filename : str or ~pathlib.Path
            Name of an OBJ file.
        *args
            Variable number of arguments of type :class:`str`.

        Raises
        ------
        NonManifoldError
            If the faces of the file do not form a manifold mesh.

        Returns
        -------
        mesh : HalfedgeMesh
            Mesh object.
        points : ~numpy.ndarray
            Vertex coordinates, indexed by vertex.
        data : ~numpy.ndarray or None
            Data blocks as requested via `args`, in the order given.


        Vertex normals stored in a file can be read via

        >>> mesh, points, normals = HalfedgeMesh.read(filename, 'vn')
        """
        if 'v' in args:
            raise ValueError("'v' cannot be used as argument")

        if 'f' in args:
            raise ValueError("'f' cannot be used as argument")

        points, faces, *data = obj.read(filename, 'v', 'f', *args)

        if points is None:
            points = np.empty((0, 3))

        mesh = cls(points, faces or [], name=filename)

        logger.info('read %s: %d vertices, %d faces', Path(filename).name,
                    mesh.num_vertices(), mesh.num_faces())

        return (mesh, points, *data)

    def write(self, filename, points=None, **data):
        """ Write mesh to file.

        Faces are written in order of ascending face index, each face
        starting at the target of its representative halfedge.

        Parameters
        ----------
        filename : str or ~pathlib.Path
            Name of output file.
        points : array_like, optional
            Vertex coordinates, written as 'v' statements.
        **data
            Additional data blocks, see :func:`hemesh.obj.write`.

        Raises
        ------
        ValueError
            If `data` holds a 'v' or an 'f' block.
        """
        if 'v' in data:
            raise ValueError("pass vertex coordinates as 'points'")

        if 'f' in data:
            raise ValueError("'f' cannot be used as keyword argument")

        faces = [[int(v) for v in self.face_vertices(f)]
                 for f in self.faces()]

        obj.write(filename, f=faces, v=points, **data)

    def load(self, points, faces):
        """ Build mesh connectivity.

        Any previous connectivity is discarded. The build either succeeds
        completely or leaves the mesh empty.

        Parameters
        ----------
        points : array_like or int
            Vertex coordinates, or just the number of vertices.
        faces : sequence of sequences of int
            Face definitions, 0-based vertex indexing. Faces sharing an
            edge have to traverse it in opposite directions.

        Raises
        ------
        ValueError
            If a face has less than three vertices, repeats a vertex in
            consecutive corners, or refers to a vertex outside
            ``range(len(points))``.

        Returns
        -------
        bool
            :obj:`False` if two faces claim the same directed edge. The
            mesh is empty in this case.
        """
        try:
            self._build(points, faces)
        except NonManifoldError as error:
            logger.warning('rejected mesh: %s', error)
            return False

        return True

    def reset(self):
        """ Remove all mesh items.

        Ranges obtained before the reset will not produce any items.
        """
        self._allocate(0, 0, 0)

    def num_vertices(self):
        """ Number of vertices.

        Returns
        -------
        int
        """
        return len(self._vhalf)

    def num_halfedges(self):
        """ Number of halfedges, always even.

        Returns
        -------
        int
        """
        return len(self._hnext)

    def num_faces(self):
        """ Number of faces.

        Returns
        -------
        int
        """
        return len(self._fhalf)

    def num_edges(self):
        """ Number of edges.

        Returns
        -------
        int
            Half the number of halfedges.
        """
        return len(self._hnext) // 2

    def vertex(self, pos):
        """ Vertex index at table position `pos`. """
        return VertexIndex(pos)

    def halfedge(self, pos):
        """ Halfedge index at table position `pos`. """
        return HalfedgeIndex(pos)

    def face(self, pos):
        """ Face index at table position `pos`. """
        return FaceIndex(pos)

    def edge(self, pos):
        """ Edge index at position `pos`. """
        return EdgeIndex(pos)

    def vertices(self):
        """ All vertices.

        Returns
        -------
        ~hemesh.iterators.VertexRange
        """
        return iterators.VertexRange(self)

    def halfedges(self):
        """ All halfedges.

        Returns
        -------
        ~hemesh.iterators.HalfedgeRange
        """
        return iterators.HalfedgeRange(self)

    def faces(self):
        """ All faces.

        Returns
        -------
        ~hemesh.iterators.FaceRange
        """
        return iterators.FaceRange(self)

    def edges(self):
        """ All edges.

        Returns
        -------
        ~hemesh.iterators.EdgeRange
        """
        return iterators.EdgeRange(self)

    def vertex_halfedges(self, center, outgoing, clockwise=True, start=None):
        """ Halfedges around a vertex.

        Parameters
        ----------
        center : VertexIndex
            Center vertex.
        outgoing : bool
            :obj:`True` for halfedges starting at `center`, :obj:`False`
            for halfedges pointing to `center`.
        clockwise : bool, optional
            Orientation of the walk.
        start : HalfedgeIndex, optional
            The first halfedge. If it is not incident to `center` in the
            requested way a default halfedge is used.

        Returns
        -------
        ~hemesh.iterators.VertexHalfedgeRange
        """
        return iterators.VertexHalfedgeRange(self, center, outgoing,
                                             clockwise, start)

    def vertex_vertices(self, center, clockwise=True, start=None):
        """ Vertices adjacent to a vertex.

        Parameters
        ----------
        center : VertexIndex
            Center vertex.
        clockwise : bool, optional
            Orientation of the walk.
        start : VertexIndex, optional
            The first vertex to visit, if adjacent to `center`.

        Returns
        -------
        ~hemesh.iterators.VertexVertexRange
        """
        return iterators.VertexVertexRange(self, center, clockwise, start)

    def vertex_faces(self, center, clockwise=True, start=None):
        """ Faces incident to a vertex.

        Parameters
        ----------
        center : VertexIndex
            Center vertex.
        clockwise : bool, optional
            Orientation of the walk.
        start : FaceIndex, optional
            The first face to visit, if incident to `center`.

        Returns
        -------
        ~hemesh.iterators.VertexFaceRange
        """
        return iterators.VertexFaceRange(self, center, clockwise, start)

    def vertex_edges(self, center, clockwise=True, start=None):
        """ Edges incident to a vertex.

        Parameters
        ----------
        center : VertexIndex
            Center vertex.
        clockwise : bool, optional
            Orientation of the walk.
        start : EdgeIndex, optional
            The first edge to visit, if incident to `center`.

        Returns
        -------
        ~hemesh.iterators.VertexEdgeRange
        """
        return iterators.VertexEdgeRange(self, center, clockwise, start)

    def face_halfedges(self, center, positive_order=True, start=None):
        """ Halfedges around a face.

        Parameters
        ----------
        center : FaceIndex
            Center face.
        positive_order : bool, optional
            Follow (:obj:`True`) or reverse the face orientation.
        start : HalfedgeIndex, optional
            The first halfedge. If it does not belong to `center` the
            representative halfedge is used.

        Returns
        -------
        ~hemesh.iterators.FaceHalfedgeRange
        """
        return iterators.FaceHalfedgeRange(self, center, positive_order,
                                           start)

    def face_vertices(self, center, positive_order=True, start=None):
        """ Vertices of a face.

        Parameters
        ----------
        center : FaceIndex
            Center face.
        positive_order : bool, optional
            Follow (:obj:`True`) or reverse the face orientation.
        start : VertexIndex, optional
            The first vertex to visit, if it belongs to `center`.

        Returns
        -------
        ~hemesh.iterators.FaceVertexRange
        """
        return iterators.FaceVertexRange(self, center, positive_order, start)

    def face_faces(self, center, positive_order=True, start=None):
        """ Faces sharing an edge with a face.

        Parameters
        ----------
        center : FaceIndex
            Center face.
        positive_order : bool, optional
            Follow (:obj:`True`) or reverse the face orientation.
        start : FaceIndex, optional
            The first neighbor to visit, if adjacent to `center`.

        Returns
        -------
        ~hemesh.iterators.FaceFaceRange
        """
        return iterators.FaceFaceRange(self, center, positive_order, start)

    def face_edges(self, center, positive_order=True, start=None):
        """ Edges of a face.

        Parameters
        ----------
        center : FaceIndex
            Center face.
        positive_order : bool, optional
            Follow (:obj:`True`) or reverse the face orientation.
        start : EdgeIndex, optional
            The first edge to visit, if it belongs to `center`.

        Returns
        -------
        ~hemesh.iterators.FaceEdgeRange
        """
        return iterators.FaceEdgeRange(self, center, positive_order, start)

    def outgoing_halfedge(self, vertex):
        """ Outgoing halfedge of a vertex.

        Parameters
        ----------
        vertex : VertexIndex

        Returns
        -------
        HalfedgeIndex
            A halfedge starting at `vertex`, invalid for isolated
            vertices.
        """
        pos = self._pos(vertex, VertexIndex, len(self._vhalf))
        return HalfedgeIndex._from_raw(_NIL if pos is None
                                       else self._vhalf[pos])

    def ingoing_halfedge(self, vertex):
        """ Ingoing halfedge of a vertex.

        Parameters
        ----------
        vertex : VertexIndex

        Returns
        -------
        HalfedgeIndex
            The opposite of :meth:`outgoing_halfedge`.
        """
        return self.opposite(self.outgoing_halfedge(vertex))

    def source_vertex(self, halfedge):
        """ Origin of a halfedge.

        Parameters
        ----------
        halfedge : HalfedgeIndex

        Returns
        -------
        VertexIndex
        """
        return self.target_vertex(self.opposite(halfedge))

    def target_vertex(self, halfedge):
        """ Target of a halfedge.

        Parameters
        ----------
        halfedge : HalfedgeIndex

        Returns
        -------
        VertexIndex
        """
        pos = self._pos(halfedge, HalfedgeIndex, len(self._htarget))
        return VertexIndex._from_raw(_NIL if pos is None
                                     else self._htarget[pos])

    def opposite(self, halfedge):
        """ Opposite halfedge.

        Parameters
        ----------
        halfedge : HalfedgeIndex

        Returns
        -------
        HalfedgeIndex
            The halfedge whose index differs from `halfedge` in the
            lowest bit.
        """
        pos = self._pos(halfedge, HalfedgeIndex, len(self._hnext))
        return HalfedgeIndex() if pos is None else HalfedgeIndex(pos ^ 1)

    def next(self, halfedge):
        """ Successor halfedge.

        Next halfedge in a face defining halfedge loop.

        Parameters
        ----------
        halfedge : HalfedgeIndex

        Returns
        -------
        HalfedgeIndex
            Invalid for boundary halfedges.
        """
        pos = self._pos(halfedge, HalfedgeIndex, len(self._hnext))
        return HalfedgeIndex._from_raw(_NIL if pos is None
                                       else self._hnext[pos])

    def prev(self, halfedge):
        """ Predecessor halfedge.

        Previous halfedge in a face defining halfedge loop.

        Parameters
        ----------
        halfedge : HalfedgeIndex

        Returns
        -------
        HalfedgeIndex
            Invalid for boundary halfedges.
        """
        pos = self._pos(halfedge, HalfedgeIndex, len(self._hprev))
        return HalfedgeIndex._from_raw(_NIL if pos is None
                                       else self._hprev[pos])

    def halfedge_face(self, halfedge):
        """ Face of a halfedge.

        Parameters
        ----------
        halfedge : HalfedgeIndex

        Returns
        -------
        FaceIndex
            The face to the left of `halfedge`, invalid for boundary
            halfedges.
        """
        pos = self._pos(halfedge, HalfedgeIndex, len(self._hface))
        return FaceIndex._from_raw(_NIL if pos is None
                                   else self._hface[pos])

    def halfedge_edge(self, halfedge):
        """ Edge of a halfedge.

        Parameters
        ----------
        halfedge : HalfedgeIndex

        Returns
        -------
        EdgeIndex
        """
        pos = self._pos(halfedge, HalfedgeIndex, len(self._hnext))
        return EdgeIndex() if pos is None else EdgeIndex(pos // 2)

    def face_halfedge(self, face):
        """ Representative halfedge of a face.

        Parameters
        ----------
        face : FaceIndex

        Returns
        -------
        HalfedgeIndex
            The halfedge that ends at the first vertex of the face
            definition passed to :meth:`load`.
        """
        pos = self._pos(face, FaceIndex, len(self._fhalf))
        return HalfedgeIndex._from_raw(_NIL if pos is None
                                       else self._fhalf[pos])

    def edge_halfedge(self, edge, toward_larger=True):
        """ Halfedge of an edge.

        Parameters
        ----------
        edge : EdgeIndex
        toward_larger : bool, optional
            Select the halfedge pointing from the smaller to the larger
            vertex (:obj:`True`) or the other one.

        Returns
        -------
        HalfedgeIndex
        """
        pos = self._pos(edge, EdgeIndex, self.num_edges())

        if pos is None:
            return HalfedgeIndex()

        return HalfedgeIndex(2 * pos if toward_larger else 2 * pos + 1)

    def edge_vertices(self, edge):
        """ Vertices of an edge.

        Parameters
        ----------
        edge : EdgeIndex

        Returns
        -------
        (VertexIndex, VertexIndex)
            The smaller and the larger vertex of `edge`.
        """
        h = self.edge_halfedge(edge)
        return self.source_vertex(h), self.target_vertex(h)

    def face_valence(self, face):
        """ Face valence.

        Parameters
        ----------
        face : FaceIndex

        Returns
        -------
        int
            Number of vertices of `face`, zero for invalid faces.
        """
        return sum(1 for _ in self.face_halfedges(face))

    def is_boundary_halfedge(self, halfedge):
        """ Topological state.

        A halfedge is called a boundary halfedge if it has no face.

        Parameters
        ----------
        halfedge : HalfedgeIndex

        Returns
        -------
        bool
        """
        pos = self._pos(halfedge, HalfedgeIndex, len(self._hface))
        return pos is not None and self._hface[pos] == _NIL

    def is_boundary_edge(self, edge):
        """ Topological state.

        An edge is a boundary edge if one of its halfedges is a boundary
        halfedge.

        Parameters
        ----------
        edge : EdgeIndex

        Returns
        -------
        bool
        """
        h = self.edge_halfedge(edge)

        return (self.is_boundary_halfedge(h) or
                self.is_boundary_halfedge(self.opposite(h)))

    def is_boundary_vertex(self, vertex):
        """ Topological state.

        A vertex is a boundary vertex if it is incident to a boundary
        halfedge.

        Parameters
        ----------
        vertex : VertexIndex

        Returns
        -------
        bool
        """
        pos = self._pos(vertex, VertexIndex, len(self._vboundary))
        return pos is not None and bool(self._vboundary[pos])

    def is_boundary_face(self, face):
        """ Topological state.

        A face is a boundary face if one of its edges is a boundary edge.

        Parameters
        ----------
        face : FaceIndex

        Returns
        -------
        bool

        Note
        ----
        A face only incident with boundary vertices is **not** classified
        as a boundary face.
        """
        return any(self.is_boundary_halfedge(self.opposite(h))
                   for h in self.face_halfedges(face))

    def is_isolated_vertex(self, vertex):
        """ Topological state.

        A vertex is isolated if no face refers to it.

        Parameters
        ----------
        vertex : VertexIndex

        Returns
        -------
        bool
            :obj:`False` for invalid vertices.
        """
        pos = self._pos(vertex, VertexIndex, len(self._vhalf))
        return pos is not None and self._vhalf[pos] == _NIL

    def _allocate(self, num_verts, num_halfs, num_faces):
        """ Replace all tables by empty ones of the given sizes.
        """
        self._vhalf = np.full(num_verts, _NIL, dtype=np.int64)

        self._hnext = np.full(num_halfs, _NIL, dtype=np.int64)
        self._hprev = np.full(num_halfs, _NIL, dtype=np.int64)
        self._htarget = np.full(num_halfs, _NIL, dtype=np.int64)
        self._hface = np.full(num_halfs, _NIL, dtype=np.int64)

        self._fhalf = np.full(num_faces, _NIL, dtype=np.int64)

        # Reserved for topological modification. No operation sets
        # these flags.
        self._vremoved = np.zeros(num_verts, dtype=bool)
        self._hremoved = np.zeros(num_halfs, dtype=bool)
        self._fremoved = np.zeros(num_faces, dtype=bool)

        # Set for both endpoints of every boundary halfedge.
        self._vboundary = np.zeros(num_verts, dtype=bool)

        self._generation += 1

    def _build(self, points, faces):
        """ Populate the connectivity tables.

        Raises
        ------
        NonManifoldError
            If two faces claim the same directed edge.
        ValueError
            For malformed face definitions.

        Note
        ----
        The tables are empty whenever an exception leaves this method.
        """
        self.reset()

        if isinstance(points, numbers.Integral):
            num_verts = int(points)
        else:
            num_verts = len(points)

        if num_verts < 0:
            raise ValueError(f'invalid number of vertices {num_verts}')

        faces = [self._face_definition(fi, face, num_verts)
                 for fi, face in enumerate(faces)]

        # Halfedge table columns. Grown by one halfedge pair whenever an
        # undirected edge is encountered for the first time.
        nxt, prv, tgt, fce = [], [], [], []

        vhalf = [_NIL] * num_verts
        fhalf = [_NIL] * len(faces)

        # Maps (smaller, larger) vertex pairs to edge numbers. Insertion
        # order defines the edge numbering.
        edges = dict()

        for fi, face in enumerate(faces):
            n = len(face)
            loop = []

            # Halfedge k of the loop points from face[k-1] to face[k].
            # The even halfedge of an edge points to the larger vertex.
            for k in range(n):
                u, v = face[k - 1], face[k]
                key = (u, v) if u < v else (v, u)

                if key not in edges:
                    edges[key] = len(edges)

                    nxt.extend((_NIL, _NIL))
                    prv.extend((_NIL, _NIL))
                    tgt.extend((_NIL, _NIL))
                    fce.extend((_NIL, _NIL))

                e = edges[key]
                loop.append(2 * e if u < v else 2 * e + 1)

            for k in range(n):
                u, v = face[k - 1], face[k]
                h = loop[k]

                # A second face traversing the same directed edge.
                if fce[h] != _NIL:
                    msg = (f'edge ({u}, {v}) of face #{fi} is already ' +
                           f'used by face #{fce[h]}')
                    raise NonManifoldError(msg)

                if vhalf[u] == _NIL:
                    vhalf[u] = h

                nxt[h] = loop[(k + 1) % n]
                prv[h] = loop[k - 1]
                tgt[h] = v
                fce[h] = fi

                # Unless claimed by another face later on, the opposite
                # halfedge stays a boundary halfedge.
                tgt[h ^ 1] = u

            fhalf[fi] = loop[0]

        num_halfs = len(nxt)
        self._allocate(num_verts, num_halfs, len(faces))

        self._vhalf[:] = vhalf
        self._hnext[:] = nxt
        self._hprev[:] = prv
        self._htarget[:] = tgt
        self._hface[:] = fce
        self._fhalf[:] = fhalf

        for h in range(num_halfs):
            if fce[h] == _NIL:
                self._vboundary[tgt[h]] = True
                self._vboundary[tgt[h ^ 1]] = True

        logger.debug('built halfedge mesh: %d vertices, %d edges, ' +
                     '%d faces', num_verts, num_halfs // 2, len(faces))

        num_isolated = vhalf.count(_NIL)

        if num_isolated:
            logger.info('mesh has %d isolated vertices', num_isolated)

    @staticmethod
    def _face_definition(fi, face, num_verts):
        """ Validated face definition.

        Raises
        ------
        ValueError
            If the face has less than three vertices, repeats a vertex
            in consecutive corners, or refers to a vertex outside
            ``range(num_verts)``.

        Returns
        -------
        list[int]
        """
        try:
            face = [operator.index(v) for v in face]
        except TypeError:
            raise ValueError(f'face #{fi} holds non-integer vertex ' +
                             'indices') from None

        if len(face) < 3:
            raise ValueError(f'face #{fi} has less than three vertices')

        # Non-adjacent corners may share a vertex. Consecutive ones would
        # define an edge from a vertex to itself.
        for k, v in enumerate(face):
            if v == face[k - 1]:
                msg = (f'face #{fi} repeats vertex {v} in consecutive ' +
                       'corners')
                raise ValueError(msg)

        for v in face:
            if not 0 <= v < num_verts:
                msg = (f'face #{fi} refers to vertex {v} outside ' +
                       f'range(0, {num_verts})')
                raise ValueError(msg)

        return face

    @staticmethod
    def _pos(item, kind, count):
        """ Table position of an index or None if out of range.
        """
        if type(item) is not kind:
            msg = (f'expected {kind.__name__}, ' +
                   f'got {type(item).__name__}')
            raise TypeError(msg)

        idx = item._idx

        return idx if idx is not None and idx < count else None

    def _contains(self, item):
        """ Range check for vertex and face indices.
        """
        if type(item) is VertexIndex:
            return self._pos(item, VertexIndex, len(self._vhalf)) is not None

        return self._pos(item, FaceIndex, len(self._fhalf)) is not None

    def _check(self):
        """ Perform sanity checks.
        """
        assert len(self._hnext) % 2 == 0

        for v in self.vertices():
            h = self.outgoing_halfedge(v)

            if h.valid:
                assert self.source_vertex(h) == v

        for h in self.halfedges():
            assert self.opposite(self.opposite(h)) == h
            assert self.target_vertex(h).valid

            if self.halfedge_face(h).valid:
                assert self.next(self.prev(h)) == h
                assert self.prev(self.next(h)) == h
                assert self.halfedge_face(self.next(h)) == \
                    self.halfedge_face(h)
                assert self.source_vertex(self.next(h)) == \
                    self.target_vertex(h)
            else:
                assert not self.next(h).valid
                assert not self.prev(h).valid
                assert self.is_boundary_vertex(self.target_vertex(h))
                assert self.is_boundary_vertex(self.source_vertex(h))

        for f in self.faces():
            h = self.face_halfedge(f)

            assert h.valid
            assert self.halfedge_face(h) == f


class NonManifoldError(Exception):
    """ Manifold exception base class.

    Raised if a face definition violates the manifold condition: a
    directed edge may belong to at most one face.
    """

    pass
