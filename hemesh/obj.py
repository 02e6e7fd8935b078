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

""" OBJ file I/O.

Low-level functions to read and write the vertex and face statements of
OBJ files. This is the producer of the ``(points, faces)`` pair consumed
by :meth:`~hemesh.hds.HalfedgeMesh.load`. Only a subset of the OBJ
standard is supported. Complete specifications can be found in the
`Advanced Visualizer Manual`.
"""

import numpy as np


def _parse(block):
    """ Parse vertex definition.

    Returned values can be negative (relative offsets). If positive,
    indices are 1-based.

    Parameters
    ----------
    block : str
        A v/vt/vn string representing a vertex definition as encountered
        when reading 'f' statements.

    Raises
    ------
    ValueError
        If the string could not be parsed.

    Returns
    -------
    v : int
        Vertex index.
    vt : int or None
        Vertex texture index.
    vn : int or None
        Vertex normal index.
    """
    vt, vn = None, None

    if '//' in block:
        bits = block.split('//')

        # A v//vn statement is split by // into exactly two parts.
        if len(bits) != 2:
            raise ValueError('invalid v//vn definition: ' + block)

        v, vn = (int(bit) for bit in bits)
    elif '/' in block:
        bits = block.split('/')

        # A v/vt or v/vt/vn statement depending on how many parts it
        # gets split into. Empty vt entries are not allowed here.
        if len(bits) == 2:
            v, vt = (int(bit) for bit in bits)
        elif len(bits) == 3:
            v, vt, vn = (int(bit) for bit in bits)
        else:
            raise ValueError('invalid v/vt/vn or v/vt definition: ' + block)
    else:
        v = int(block)

    if v == 0:
        raise ValueError('vertex indices are 1-based: ' + block)

    return v, vt, vn


def read(filename, *args):
    """ Read from file.

    Assumes an OBJ-like file structure, i.e., a text file where each
    line starts with a tag. Lines whose tag is contained in `args` are
    read. Data blocks are returned in the same order as given in `args`.
    If no corresponding data is found in the file the requested data
    block is represented as :obj:`None`.

    Parameters
    ----------
    filename : str or ~pathlib.Path
        Name of an OBJ file.
    *args
        Variable number of arguments of type :class:`str`.

    Raises
    ------
    ValueError
        If any argument is not of type :class:`str` or the file contents
        cannot be parsed.

    Returns
    -------
    object or tuple(object, ...)
        Data blocks corresponding to line tags given in `args`.


    To read vertices and faces from an OBJ file do

    >>> v, f = read('input-file.obj', 'v', 'f')

    Data blocks are returned as objects of type :class:`~numpy.ndarray`.
    This assumes that data associated with a specific tag is homogeneous.
    The exception being the 'f' tag returning ``list[list[int]]`` of
    0-based vertex indices.
    """
    if not args:
        return None

    if any(not isinstance(arg, str) for arg in args):
        raise ValueError("arguments have to be of type 'str'")

    # Rows of each data block are collected in lists and converted once
    # the whole file has been read.
    rows = {arg: [] for arg in args}

    # The number of encountered vertex coordinates. Needed to resolve
    # negative (relative) vertex indices.
    vcnt = 0

    with open(filename, 'r') as file:
        for line in file:
            blocks = line.split()

            if not blocks:
                continue

            if blocks[0] == 'v':
                vcnt += 1

            if blocks[0] not in rows:
                continue

            if blocks[0] == 'f':
                face = []

                for block in blocks[1:]:
                    v = _parse(block)[0]
                    face.append(vcnt + v if v < 0 else v - 1)

                rows['f'].append(face)
            else:
                rows[blocks[0]].append([float(b) for b in blocks[1:]])

    data = []

    for arg in args:
        if not rows[arg]:
            data.append(None)
        elif arg == 'f':
            data.append(rows[arg])
        else:
            data.append(np.array(rows[arg], dtype=float))

    if len(args) == 1:
        return data[0]

    return tuple(data)


def write(filename, *, f=None, **data):
    """ Write to file.

    Face data is expected as a nested list of 0-based vertex indices.

    Parameters
    ----------
    filename : str or ~pathlib.Path
        Name of output file.
    f : list[list[int]], optional
        Face definitions.
    **data
        Keyword arguments.


    Data blocks to be stored in the file are passed via keyword arguments:

    >>> write('output-file.obj', v=points, f=faces)

    This assumes that each data block can be interpreted as a
    2-dimensional array. The contents of each row are written to a line
    that starts with the given tag.
    """
    faces = [] if f is None else f

    with open(filename, 'w') as file:
        for key, value in data.items():
            if value is None or len(value) == 0:
                continue

            for row in np.atleast_2d(value):
                file.write(key)

                for element in row:
                    file.write(f' {element}')

                file.write('\n')

        for face in faces:
            file.write('f')

            for vertex in face:
                file.write(f' {int(vertex) + 1}')

            file.write('\n')
