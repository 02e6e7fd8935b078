"""
Neighborhood range tests
========================

Vertex and face walks, their mapped variants, start positions, boundary
behavior, and the lifetime rules of range objects.
"""

import gc

import pytest

import hemesh.iterators as iterators

from hemesh.hds import HalfedgeMesh
from hemesh.index import VertexIndex, HalfedgeIndex, FaceIndex, EdgeIndex
from hemesh.iterators import VertexRange, VertexVertexRange

from conftest import points, TETRAHEDRON


V, H, F, E = VertexIndex, HalfedgeIndex, FaceIndex, EdgeIndex


def vs(*args):
    return [V(i) for i in args]


def hs(*args):
    return [H(i) for i in args]


# =============================================================================
# Flat ranges
# =============================================================================

def test_flat_ranges(two_triangles):
    assert list(two_triangles.vertices()) == vs(0, 1, 2, 3)
    assert list(two_triangles.halfedges()) == hs(*range(10))
    assert list(two_triangles.faces()) == [F(0), F(1)]
    assert list(two_triangles.edges()) == [E(i) for i in range(5)]


def test_flat_range_len_and_contains(two_triangles):
    rng = two_triangles.vertices()

    assert len(rng) == 4
    assert V(3) in rng
    assert V(4) not in rng
    assert V() not in rng
    assert F(0) not in rng
    assert repr(rng) == 'VertexRange(4)'


def test_flat_ranges_of_empty_mesh():
    mesh = HalfedgeMesh()

    assert list(mesh.vertices()) == []
    assert len(mesh.halfedges()) == 0


# =============================================================================
# Face walks
# =============================================================================

def test_face_halfedges(triangle):
    assert list(triangle.face_halfedges(F(0))) == hs(1, 2, 4)
    assert list(triangle.face_halfedges(F(0), False)) == hs(1, 4, 2)


def test_face_vertices_reproduce_face_definition(mesh):
    faces = [[int(v) for v in mesh.face_vertices(f)] for f in mesh.faces()]
    rebuilt = HalfedgeMesh(mesh.num_vertices(), faces)

    assert rebuilt.size == mesh.size
    assert [[int(v) for v in rebuilt.face_vertices(f)]
            for f in rebuilt.faces()] == faces


def test_face_vertices(two_triangles, quad_strip):
    assert list(two_triangles.face_vertices(F(1))) == vs(1, 0, 3)
    assert list(two_triangles.face_vertices(F(1), False)) == vs(1, 3, 0)
    assert list(quad_strip.face_vertices(F(0))) == vs(0, 1, 4, 3)
    assert list(quad_strip.face_vertices(F(1))) == vs(1, 2, 5, 4)


def test_face_halfedges_start(two_triangles):
    mesh = two_triangles

    assert list(mesh.face_halfedges(F(0), start=H(4))) == hs(4, 1, 2)

    # H(3) belongs to face 1, the walk starts at the default position.
    assert list(mesh.face_halfedges(F(0), start=H(3))) == hs(1, 2, 4)


def test_face_vertices_start(two_triangles):
    assert list(two_triangles.face_vertices(F(0), start=V(2))) == \
        vs(2, 0, 1)
    assert list(two_triangles.face_vertices(F(0), start=V(3))) == \
        vs(0, 1, 2)


def test_face_faces_reports_boundary(two_triangles, triangle):
    mesh = two_triangles

    assert list(mesh.face_faces(F(0))) == [F(), F(1), F()]
    assert list(mesh.face_faces(F(1))) == [F(), F(0), F()]
    assert list(mesh.face_faces(F(0), start=F(1))) == [F(1), F(), F()]
    assert list(triangle.face_faces(F(0))) == [F(), F(), F()]


def test_face_faces_closed(tetrahedron):
    for f in tetrahedron.faces():
        ring = list(tetrahedron.face_faces(f))

        assert len(ring) == 3
        assert all(g.valid and g != f for g in ring)
        assert len(set(ring)) == 3


def test_face_edges(quad_strip):
    assert list(quad_strip.face_edges(F(0))) == [E(0), E(1), E(2), E(3)]
    assert list(quad_strip.face_faces(F(0))) == [F(), F(), F(1), F()]


def test_face_valence_matches_ranges(mesh):
    for f in mesh.faces():
        n = mesh.face_valence(f)

        assert len(mesh.face_halfedges(f)) == n
        assert len(mesh.face_vertices(f, False)) == n
        assert len(mesh.face_edges(f)) == n


# =============================================================================
# Vertex walks
# =============================================================================

def test_vertex_walk_interior(tetrahedron):
    mesh = tetrahedron

    assert list(mesh.vertex_halfedges(V(0), True)) == hs(2, 6, 0)
    assert list(mesh.vertex_vertices(V(0))) == vs(2, 3, 1)
    assert list(mesh.vertex_vertices(V(0), False)) == vs(2, 1, 3)
    assert list(mesh.vertex_faces(V(0))) == [F(0), F(2), F(1)]


def test_closed_walk_orientations_are_reverse(tetrahedron):
    for v in tetrahedron.vertices():
        cw = list(tetrahedron.vertex_halfedges(v, True, True))
        ccw = list(tetrahedron.vertex_halfedges(v, True, False))

        assert len(cw) == 3
        assert ccw == [cw[0]] + cw[:0:-1]


def test_vertex_walk_directions(mesh):
    for v in mesh.vertices():
        for clockwise in (True, False):
            for h in mesh.vertex_halfedges(v, True, clockwise):
                assert mesh.source_vertex(h) == v

            for h in mesh.vertex_halfedges(v, False, clockwise):
                assert mesh.target_vertex(h) == v


def test_vertex_walk_start(tetrahedron):
    mesh = tetrahedron

    assert list(mesh.vertex_halfedges(V(0), True, start=H(6))) == \
        hs(6, 0, 2)
    assert list(mesh.vertex_faces(V(0), start=F(1))) == [F(1), F(0), F(2)]
    assert list(mesh.vertex_vertices(V(0), start=V(3))) == vs(3, 1, 2)

    # H(7) points to vertex 0, it is no outgoing halfedge.
    assert list(mesh.vertex_halfedges(V(0), True, start=H(7))) == \
        hs(2, 6, 0)


def test_ingoing_walk(tetrahedron):
    ring = list(tetrahedron.vertex_halfedges(V(0), False))

    assert ring[0] == tetrahedron.ingoing_halfedge(V(0))
    assert len(ring) == 3


def test_boundary_walk_is_one_sided(triangle):
    mesh = triangle

    assert list(mesh.vertex_halfedges(V(0), True)) == hs(2)
    assert list(mesh.vertex_halfedges(V(0), True, False)) == hs(2, 0)
    assert list(mesh.vertex_halfedges(V(0), False)) == hs(3)
    assert list(mesh.vertex_halfedges(V(0), False, False)) == hs(3, 1)


def test_fan_walks(fan):
    mesh = fan

    assert list(mesh.vertex_vertices(V(0))) == vs(1)
    assert list(mesh.vertex_vertices(V(0), False)) == vs(1, 2, 3, 4, 5)
    assert list(mesh.vertex_halfedges(V(0), True, False)) == \
        hs(2, 0, 6, 10, 14)
    assert list(mesh.vertex_halfedges(V(0), False, False)) == \
        hs(3, 1, 7, 11, 15)
    assert list(mesh.vertex_halfedges(V(0), False, True)) == hs(3)


def test_fan_rings(fan):
    mesh = fan

    assert list(mesh.vertex_faces(V(0), False)) == \
        [F(0), F(1), F(2), F(3), F()]
    assert list(mesh.vertex_edges(V(0), False)) == \
        [E(1), E(0), E(3), E(5), E(7)]
    assert list(mesh.vertex_vertices(V(3))) == vs(0, 4)
    assert list(mesh.vertex_vertices(V(3), False)) == vs(0, 2)


def test_two_triangle_rings(two_triangles):
    mesh = two_triangles

    assert list(mesh.vertex_vertices(V(0))) == vs(1, 3)
    assert list(mesh.vertex_vertices(V(0), False)) == vs(1, 2)
    assert list(mesh.vertex_faces(V(0))) == [F(0), F(1)]
    assert list(mesh.vertex_edges(V(0))) == [E(1), E(4)]


def test_ring_start(two_triangles):
    mesh = two_triangles

    assert list(mesh.vertex_faces(V(0), start=F(1))) == [F(1)]
    assert list(mesh.vertex_vertices(V(0), start=V(3))) == vs(3)

    # Vertex 2 is not reached by the clockwise walk.
    assert list(mesh.vertex_vertices(V(0), start=V(2))) == vs(1, 3)


def test_quad_strip_rings(quad_strip):
    assert list(quad_strip.vertex_vertices(V(1))) == vs(4, 2)
    assert list(quad_strip.vertex_vertices(V(1), False)) == vs(4, 0)


def test_isolated_vertex_ring(fan):
    assert list(fan.vertex_halfedges(V(6), True)) == []
    assert list(fan.vertex_vertices(V(6))) == []
    assert len(fan.vertex_faces(V(6))) == 0


# =============================================================================
# Invalid centers
# =============================================================================

@pytest.mark.parametrize('center', [V(), V(4), V(1000)])
def test_vertex_ranges_of_invalid_center(two_triangles, center):
    assert list(two_triangles.vertex_halfedges(center, True)) == []
    assert list(two_triangles.vertex_vertices(center)) == []
    assert list(two_triangles.vertex_faces(center)) == []
    assert list(two_triangles.vertex_edges(center)) == []


@pytest.mark.parametrize('center', [F(), F(2), F(1000)])
def test_face_ranges_of_invalid_center(two_triangles, center):
    assert list(two_triangles.face_halfedges(center)) == []
    assert list(two_triangles.face_vertices(center)) == []
    assert list(two_triangles.face_faces(center)) == []
    assert list(two_triangles.face_edges(center)) == []


def test_range_without_mesh():
    assert list(VertexRange(None)) == []
    assert list(VertexVertexRange(None, V(0))) == []
    assert len(VertexRange(None)) == 0


def test_wrong_center_kind(two_triangles):
    with pytest.raises(TypeError):
        two_triangles.vertex_vertices(F(0))

    with pytest.raises(TypeError):
        two_triangles.face_vertices(V(0))

    with pytest.raises(TypeError):
        two_triangles.vertex_faces(V(0), start=V(1))


# =============================================================================
# Range lifetime
# =============================================================================

def test_ranges_are_restartable(tetrahedron):
    ring = tetrahedron.vertex_vertices(V(0))

    assert list(ring) == list(ring)
    assert len(ring) == 3

    it = iter(ring)
    next(it)

    assert list(ring) == vs(2, 3, 1)


def test_range_repr(two_triangles):
    assert repr(two_triangles.face_vertices(F(1))) == \
        'FaceVertexRange([VertexIndex(1), VertexIndex(0), VertexIndex(3)])'


def test_stale_range_after_reset(two_triangles):
    ring = two_triangles.vertex_vertices(V(0))
    everything = two_triangles.vertices()

    two_triangles.reset()

    assert list(ring) == []
    assert list(everything) == []
    assert len(everything) == 0


def test_stale_range_after_reload(two_triangles):
    ring = two_triangles.vertex_vertices(V(0))

    assert two_triangles.load(points(4), TETRAHEDRON)
    assert list(ring) == []
    assert list(two_triangles.vertex_vertices(V(0))) == vs(2, 3, 1)


def test_running_iteration_stops_on_reload(tetrahedron):
    it = iter(tetrahedron.face_vertices(F(0)))

    assert next(it) == V(0)

    tetrahedron.load(points(3), [[0, 1, 2]])

    assert list(it) == []


def test_running_iteration_stops_on_reset(two_triangles):
    it = iter(two_triangles.halfedges())
    next(it)

    two_triangles.reset()

    assert list(it) == []


def test_range_outliving_mesh():
    mesh = HalfedgeMesh(points(4), TETRAHEDRON)
    ring = mesh.vertex_faces(V(0))

    del mesh
    gc.collect()

    assert list(ring) == []


# =============================================================================
# Dispatching helpers
# =============================================================================

def test_verts(two_triangles):
    mesh = two_triangles

    assert list(iterators.verts(mesh)) == vs(0, 1, 2, 3)
    assert list(iterators.verts(mesh, V(0))) == vs(1, 3)
    assert list(iterators.verts(mesh, F(1))) == vs(1, 0, 3)


def test_halfs(two_triangles):
    mesh = two_triangles

    assert len(iterators.halfs(mesh)) == 10
    assert list(iterators.halfs(mesh, V(0))) == hs(2, 8)
    assert list(iterators.halfs(mesh, F(0))) == hs(1, 2, 4)


def test_edges(two_triangles):
    mesh = two_triangles

    assert len(iterators.edges(mesh)) == 5
    assert list(iterators.edges(mesh, V(0))) == [E(1), E(4)]
    assert list(iterators.edges(mesh, F(0))) == [E(0), E(1), E(2)]


def test_faces_skips_boundary(two_triangles, fan):
    assert list(iterators.faces(two_triangles)) == [F(0), F(1)]
    assert list(iterators.faces(two_triangles, F(0))) == [F(1)]
    assert list(iterators.faces(fan, V(0))) == [F(0)]


def test_faces_helper_is_restartable(two_triangles):
    rng = iterators.faces(two_triangles, V(0))

    assert list(rng) == [F(0), F(1)]
    assert list(rng) == list(rng)
    assert len(rng) == 2

    two_triangles.reset()

    assert list(rng) == []


@pytest.mark.parametrize('helper', [
    iterators.verts, iterators.halfs, iterators.edges, iterators.faces,
])
def test_helpers_reject_other_items(two_triangles, helper):
    with pytest.raises(TypeError):
        helper(two_triangles, E(0))
