import logging
import os
import pathlib

import gustaf as gus
import torch as _torch
import vtk

from MarchingCubes.marching_cubes import march_cube, get_offset, interpolate
from MarchingCubes.tables import CORNERS, EDGE_CONNECTION
from MarchingCubes.SDF import SDFBase
import MarchingCubes

logger = logging.getLogger(MarchingCubes.__name__)


class torchSurfMesh:
    def __init__(self, vertices: _torch.Tensor, faces: _torch.Tensor):
        self.vertices = vertices
        self.faces = faces

    def to_gus(self):
        return gus.Faces(
            self.vertices.detach().cpu().numpy(), self.faces.detach().cpu().numpy()
        )


def construct_voxel_grid(
    resolution, bounds=None, device="cpu"
) -> tuple[_torch.Tensor, _torch.Tensor]:
    """
    Generates a 3D grid of vertices and the corner indices of each cube.

    Args:
        resolution (int or tuple[int, int, int]): Number of cubes along each axis.
            If an integer is provided, it is applied to all three axes.
        bounds (torch.Tensor, optional): 2×3 tensor defining the [min, max] bounds
            in x, y and z. Defaults to [[-0.05, -0.05, -0.05], [1.05, 1.05, 1.05]].
        device (str): Device the returned tensors live on.

    Returns:
        (torch.Tensor, torch.Tensor): Tuple containing:
            - Vertices (N×3): Unique vertex coordinates of the grid.
            - Cubes (C×8): Indices into `vertices` of each cube's corners, in the
              corner order of :data:`MarchingCubes.tables.CORNERS`.
    """
    res = resolution
    if isinstance(res, int):
        res = (res, res, res)
    if len(res) != 3 or min(res) < 1:
        raise ValueError(
            f"Resolution must be a positive integer or a list of 3, got {resolution}"
        )

    n_verts = [r + 1 for r in res]
    # row major vertex ids: x * (ny * nz) + y * nz + z
    strides = _torch.tensor(
        [n_verts[1] * n_verts[2], n_verts[2], 1], dtype=_torch.long, device=device
    )
    cube_corners = _torch.tensor(CORNERS, dtype=_torch.long, device=device)

    origins = _torch.nonzero(_torch.ones(res, device=device))  # C, 3
    corner_coords = origins.unsqueeze(1) + cube_corners.unsqueeze(0)  # C, 8, 3
    cubes = (corner_coords * strides).sum(dim=-1)

    vert_coords = _torch.nonzero(_torch.ones(n_verts, device=device)).to(
        _torch.get_default_dtype()
    ) / _torch.tensor(res, device=device)

    if bounds is None:
        bounds = _torch.tensor(
            [[-0.05, -0.05, -0.05], [1.05, 1.05, 1.05]],
            device=device,
            dtype=vert_coords.dtype,
        )
    else:
        bounds = _torch.as_tensor(bounds, device=device, dtype=vert_coords.dtype)
        if bounds.shape != (2, 3):
            raise ValueError(f"bounds must have shape [2, 3], got {list(bounds.shape)}")

    # Scale samples from [0, 1] to the given bounds
    verts = bounds[0] + (bounds[1] - bounds[0]) * vert_coords
    logger.debug(f"Constructed voxel grid with {verts.shape[0]} vertices")
    return verts, cubes


def march_grid(
    voxelgrid_vertices: _torch.Tensor,
    scalar_field: _torch.Tensor,
    cube_idx: _torch.Tensor,
    attributes: _torch.Tensor | None = None,
):
    """
    Extracts the zero level set of a scalar field sampled on a voxel grid.

    Every cube is marched with :func:`MarchingCubes.marching_cubes.march_cube`.
    Vertices are keyed by the pair of grid vertices spanning their edge, so a
    vertex on an edge shared by up to four cubes is created only once.
    Positions (and attributes) are differentiable with respect to
    ``voxelgrid_vertices`` and ``scalar_field``.

    Args:
        voxelgrid_vertices (torch.Tensor): Coordinates of the grid vertices (N×3).
        scalar_field (torch.Tensor): Field value at each grid vertex (N or N×1).
            Values ``<= 0`` are inside.
        cube_idx (torch.LongTensor): Corner indices of each cube (C×8).
        attributes (torch.Tensor, optional): Per grid vertex attributes (N×k),
            e.g. colors, interpolated the same way as the positions.

    Returns:
        (torch.Tensor, torch.LongTensor, torch.Tensor | None): Tuple of:
            - Vertices (V×3) of the surface.
            - Faces (F×3), triangle indices into the vertices.
            - Attributes (V×k) of the surface vertices, or None.
    """
    scalar_field = scalar_field.reshape(-1)
    n_grid_verts = voxelgrid_vertices.shape[0]
    if voxelgrid_vertices.ndim != 2 or voxelgrid_vertices.shape[1] != 3:
        raise ValueError(
            f"Expected vertices of shape (N, 3), got {voxelgrid_vertices.shape}"
        )
    if scalar_field.shape[0] != n_grid_verts:
        raise ValueError(
            f"Scalar field has {scalar_field.shape[0]} values "
            f"but the grid has {n_grid_verts} vertices"
        )
    if cube_idx.ndim != 2 or cube_idx.shape[1] != 8:
        raise ValueError(f"Expected cube indices of shape (C, 8), got {cube_idx.shape}")
    if attributes is not None and attributes.shape[0] != n_grid_verts:
        raise ValueError(
            f"Expected one attribute row per grid vertex ({n_grid_verts}), "
            f"got {attributes.shape[0]}"
        )

    # classify all cubes at once and only march those cut by the surface
    corner_values = scalar_field.detach()[cube_idx]
    corner_bits = _torch.pow(2, _torch.arange(8, device=cube_idx.device))
    case_ids = ((corner_values <= 0).long() * corner_bits).sum(dim=1)
    surface_cubes = _torch.nonzero((case_ids != 0) & (case_ids != 255)).reshape(-1)

    vertex_ids = {}
    new_verts = []
    new_attributes = []
    face_vertex_ids = []

    for cube in surface_cubes.tolist():
        corners = cube_idx[cube].tolist()

        def add_vertex(edge):
            a, b = EDGE_CONNECTION[edge]
            key = tuple(sorted((corners[a], corners[b])))
            if key not in vertex_ids:
                lo, hi = key
                t = get_offset(scalar_field[lo], scalar_field[hi])
                vertex_ids[key] = len(new_verts)
                new_verts.append(
                    interpolate(voxelgrid_vertices[lo], voxelgrid_vertices[hi], t)
                )
                if attributes is not None:
                    new_attributes.append(
                        interpolate(attributes[lo], attributes[hi], t)
                    )
            face_vertex_ids.append(vertex_ids[key])

        march_cube(corner_values[cube].tolist(), add_vertex)

    if new_verts:
        verts = _torch.stack(new_verts)
    else:
        verts = voxelgrid_vertices.new_zeros((0, 3))
    faces = _torch.tensor(
        face_vertex_ids, dtype=_torch.long, device=voxelgrid_vertices.device
    ).reshape(-1, 3)

    surface_attributes = None
    if attributes is not None:
        if new_attributes:
            surface_attributes = _torch.stack(new_attributes)
        else:
            surface_attributes = attributes.new_zeros((0,) + attributes.shape[1:])

    logger.debug(
        f"Marched {surface_cubes.shape[0]} of {cube_idx.shape[0]} cubes: "
        f"{verts.shape[0]} vertices, {faces.shape[0]} faces"
    )
    return verts, faces, surface_attributes


def create_3D_mesh(
    sdf: SDFBase, resolution, bounds=None, device="cpu"
) -> torchSurfMesh:
    """
    Samples an SDF on a voxel grid and extracts its zero level set.

    Args:
        sdf (SDFBase): Signed distance function to mesh.
        resolution (int or tuple[int, int, int]): Number of cubes along each axis.
        bounds (torch.Tensor, optional): 2×3 meshing region. Defaults to the
            domain bounds of the SDF.
        device (str): Device of the sampling grid.

    Returns:
        torchSurfMesh: Triangle mesh of the surface.
    """
    if bounds is None:
        bounds = sdf._get_domain_bounds()
    samples, cube_idx = construct_voxel_grid(resolution, bounds=bounds, device=device)
    sdf_values = sdf(samples)

    verts, faces, _ = march_grid(samples, sdf_values, cube_idx)
    logger.info(
        f"Extracted surface mesh with {verts.shape[0]} vertices "
        f"and {faces.shape[0]} faces"
    )
    return torchSurfMesh(verts, faces)


def _export_surface_mesh_vtk(verts, faces, filename):
    """
    verts: (N, 3) array
    faces: (M, 3) array
    """
    vtk_points = vtk.vtkPoints()
    for v in verts:
        vtk_points.InsertNextPoint(v.tolist())

    vtk_cells = vtk.vtkCellArray()
    for f in faces:
        triangle = vtk.vtkTriangle()
        triangle.GetPointIds().SetId(0, int(f[0]))
        triangle.GetPointIds().SetId(1, int(f[1]))
        triangle.GetPointIds().SetId(2, int(f[2]))
        vtk_cells.InsertNextCell(triangle)

    polydata = vtk.vtkPolyData()
    polydata.SetPoints(vtk_points)
    polydata.SetPolys(vtk_cells)

    writer = vtk.vtkPolyDataWriter()
    writer.SetFileName(str(filename))
    writer.SetInputData(polydata)
    writer.Write()
    logger.info(f"Mesh saved to {filename}")


def export_surface_mesh(
    filename: str | bytes | os.PathLike[str] | os.PathLike[bytes],
    mesh: gus.Faces | torchSurfMesh,
):
    """
    Writes a surface mesh. ``.vtk`` files are written as legacy VTK polydata,
    every other suffix is passed on to meshio.
    """
    export_filename = pathlib.Path(filename)
    if not os.path.isdir(export_filename.parent):
        os.makedirs(export_filename.parent)
    ext = export_filename.suffix.lower()
    if isinstance(mesh, torchSurfMesh):
        mesh = mesh.to_gus()
    logger.debug(
        f"Exporting mesh with {len(mesh.faces)} faces, "
        f"{len(mesh.vertices)} vertices to {export_filename}"
    )
    match ext:
        case ".vtk":
            _export_surface_mesh_vtk(mesh.vertices, mesh.faces, export_filename)
        case _:
            gus.io.meshio.export(str(export_filename), mesh)
