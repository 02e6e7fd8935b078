"""
Shared mesh fixtures.

Each fixture returns a freshly built HalfedgeMesh. Face lists are
consistently oriented unless the fixture name says otherwise.
"""

import numpy as np
import pytest

from hemesh.hds import HalfedgeMesh


TRIANGLE = [[0, 1, 2]]

# Two triangles sharing the edge (0, 1), traversed in opposite directions.
TWO_TRIANGLES = [[0, 1, 2], [1, 0, 3]]

# Closed surface, every edge shared by two faces.
TETRAHEDRON = [[0, 2, 1], [0, 1, 3], [0, 3, 2], [1, 2, 3]]

# Strip of two quads:  3 -- 4 -- 5
#                      |    |    |
#                      0 -- 1 -- 2
QUAD_STRIP = [[0, 1, 4, 3], [1, 2, 5, 4]]

# Open fan of four triangles around vertex 0 plus an isolated vertex 6.
FAN = [[0, 1, 2], [0, 2, 3], [0, 3, 4], [0, 4, 5]]


def points(n):
    return np.random.default_rng(0).random((n, 3))


@pytest.fixture
def triangle():
    return HalfedgeMesh(points(3), TRIANGLE)


@pytest.fixture
def two_triangles():
    return HalfedgeMesh(points(4), TWO_TRIANGLES)


@pytest.fixture
def tetrahedron():
    return HalfedgeMesh(points(4), TETRAHEDRON)


@pytest.fixture
def quad_strip():
    return HalfedgeMesh(points(6), QUAD_STRIP)


@pytest.fixture
def fan():
    return HalfedgeMesh(points(7), FAN)


@pytest.fixture(params=['triangle', 'two_triangles', 'tetrahedron',
                        'quad_strip', 'fan'])
def mesh(request):
    """Every valid fixture mesh in turn."""
    return request.getfixturevalue(request.param)
