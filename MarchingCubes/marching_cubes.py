"""
Marching Cubes
==============

Per-cube triangulation of the zero level set of a sampled scalar field.

The functions in this module work on a single cube and hold no state between
calls. :func:`march_cube` does not build triangles itself. It reports, through
a callback, the edge each triangle vertex lies on. Callers can then place
the vertex with :func:`get_offset` and :func:`interpolate`, and share it with
neighbouring cubes that report the same edge.

Functions
---------
cube_index
    Configuration index (0-255) of 8 corner densities.
march_cube
    Emit the edge index of every triangle vertex of one cube.
get_offset
    Fraction along an edge where the field crosses zero.
interpolate
    Linear interpolation of positions, colors, normals, ...

Examples
--------
>>> from MarchingCubes.marching_cubes import march_cube
>>> edges = []
>>> march_cube([-1, -1, -1, -1, 1, 1, 1, 1], edges.append)
>>> edges
[9, 8, 10, 10, 8, 11]
"""

from typing import Callable, Protocol, Sequence, TypeVar

from MarchingCubes.tables import TRIANGLE_CONNECTION, MAX_TRIANGLES, SENTINEL

__all__ = ["Interpolable", "cube_index", "march_cube", "get_offset", "interpolate"]


class Interpolable(Protocol):
    """Anything that can be added to itself and scaled by a float."""

    def __add__(self, other): ...

    def __mul__(self, t: float): ...


T = TypeVar("T", bound=Interpolable)


def cube_index(values: Sequence[float]) -> int:
    """Compute the configuration index of a cube.

    Bit ``i`` of the result is set when ``values[i] <= 0``, so a corner lying
    exactly on the surface counts as inside.

    Parameters
    ----------
    values : sequence of float
        Densities at the 8 corners, in the order of
        :data:`MarchingCubes.tables.CORNERS`.

    Returns
    -------
    int
        Index into :data:`MarchingCubes.tables.TRIANGLE_CONNECTION`.
    """
    index = 0
    for i in range(8):
        if values[i] <= 0.0:
            index |= 1 << i
    return index


def march_cube(values: Sequence[float], edge_func: Callable[[int], None]) -> None:
    """March a single cube, given the density at each of its 8 corners.

    ``edge_func`` is invoked once for every vertex of the resulting triangles
    with the index of the edge the vertex falls on. Each triplet of
    invocations forms one triangle, wound as in the connectivity table.

    Emitting edge indices instead of triangles leaves vertex placement and
    deduplication to the caller, who can share a vertex between all cubes
    adjacent to the same edge.

    Parameters
    ----------
    values : sequence of float
        Densities at the 8 corners, in the order of
        :data:`MarchingCubes.tables.CORNERS`.
    edge_func : callable
        Called as ``edge_func(edge_index)`` with ``edge_index`` in ``[0, 11]``.

    Notes
    -----
    The number of calls is a multiple of 3 between 0 and
    ``3 * MAX_TRIANGLES``. Configurations 0 and 255 produce no calls.
    """
    triangles = TRIANGLE_CONNECTION[cube_index(values)]

    # entries are front-packed: the first empty triangle ends the list
    for i in range(MAX_TRIANGLES):
        if triangles[3 * i] == SENTINEL:
            break

        for j in range(3):
            edge_func(triangles[3 * i + j])


def get_offset(a: float, b: float) -> float:
    """Position of the zero crossing along an edge.

    Assumes the field varies linearly from ``a`` at the start of the edge to
    ``b`` at its end. The result is not clamped, so it can fall outside
    ``[0, 1]`` when ``a`` and ``b`` share a sign.

    Returns 0.5 when both ends have the same density.
    """
    delta = b - a
    if delta == 0.0:
        return 0.5
    return -a / delta


def interpolate(a: T, b: T, t: float) -> T:
    """Linearly interpolate between ``a`` and ``b``.

    Works for floats, numpy arrays, torch tensors or any other
    :class:`Interpolable`. ``t`` outside ``[0, 1]`` extrapolates.
    """
    return a * (1.0 - t) + b * t
