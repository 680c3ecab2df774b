"""
MarchingCubes - Isosurface Extraction from Sampled Scalar Fields
================================================================

MarchingCubes triangulates the zero level set of a scalar field, such as a
signed distance function (SDF), sampled on the corners of a cubic grid.

Key Components
--------------

Core
    - ``MarchingCubes.marching_cubes``: Per-cube classification and triangle
      dispatch, crossing offsets and interpolation
    - ``MarchingCubes.tables``: Connectivity table and corner/edge conventions

Mesh Operations
    - ``MarchingCubes.mesh``: Voxel grids, grid marching with shared vertices,
      mesh export

Signed Distance Functions
    - ``MarchingCubes.SDF``: Abstract base class and combinators
    - ``MarchingCubes.sdf_primitives``: Spheres, cylinders, tori, planes, boxes

Utilities
    - ``MarchingCubes.utils``: Logging configuration

Examples
--------
March a single cube::

    from MarchingCubes.marching_cubes import march_cube

    edges = []
    march_cube([-1, -1, -1, -1, 1, 1, 1, 1], edges.append)

Create a surface mesh of a sphere::

    from MarchingCubes.sdf_primitives import SphereSDF
    from MarchingCubes.mesh import create_3D_mesh

    sphere = SphereSDF(center=[0, 0, 0], radius=0.5)
    mesh = create_3D_mesh(sphere, resolution=32)
"""

import MarchingCubes.utils

MarchingCubes.utils.configure_logging()

__version__ = "0.1.0"
__author__ = "Michael Kofler"
