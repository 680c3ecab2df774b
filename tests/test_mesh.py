from collections import Counter

import gustaf as gus
import pytest
import torch

from MarchingCubes.mesh import (
    construct_voxel_grid,
    march_grid,
    create_3D_mesh,
    export_surface_mesh,
    torchSurfMesh,
)
from MarchingCubes.sdf_primitives import SphereSDF, PlaneSDF, BoxSDF
from MarchingCubes.tables import CORNERS


def edge_counts(faces):
    counter = Counter()
    for a, b, c in faces.tolist():
        for edge in ((a, b), (b, c), (c, a)):
            counter[tuple(sorted(edge))] += 1
    return counter


def test_voxel_grid():
    verts, cubes = construct_voxel_grid([2, 3, 4], bounds=[[0, 0, 0], [2, 3, 4]])
    assert verts.shape == (3 * 4 * 5, 3)
    assert cubes.shape == (2 * 3 * 4, 8)
    assert torch.unique(verts, dim=0).shape[0] == verts.shape[0]
    # unit spacing, so every cube corner sits at origin + CORNERS offset
    offsets = torch.tensor(CORNERS, dtype=verts.dtype)
    for cube in cubes:
        corners = verts[cube]
        torch.testing.assert_close(corners - corners[0], offsets)


def test_voxel_grid_default_bounds():
    verts, _ = construct_voxel_grid(4)
    torch.testing.assert_close(verts.min(dim=0).values, torch.full((3,), -0.05))
    torch.testing.assert_close(verts.max(dim=0).values, torch.full((3,), 1.05))


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(resolution=0),
        dict(resolution=[2, 2]),
        dict(resolution=4, bounds=[[0, 0], [1, 1]]),
    ],
)
def test_voxel_grid_invalid_input(kwargs):
    with pytest.raises(ValueError):
        construct_voxel_grid(**kwargs)


def test_shared_vertices_between_cubes():
    # horizontal plane at z = 0.5 through two neighbouring cubes
    plane = PlaneSDF(point=[0.0, 0.0, 0.5], normal=[0.0, 0.0, 1.0])
    verts, cubes = construct_voxel_grid([2, 1, 1], bounds=[[0, 0, 0], [1, 1, 1]])
    surf_verts, faces, attributes = march_grid(verts, plane(verts), cubes)

    assert attributes is None
    # 3 x 2 vertical edges, the 2 on the shared face are only created once
    assert surf_verts.shape == (6, 3)
    assert faces.shape == (4, 3)
    torch.testing.assert_close(surf_verts[:, 2], torch.full((6,), 0.5))
    assert faces.max().item() < surf_verts.shape[0]


def test_empty_field():
    verts, cubes = construct_voxel_grid(3)
    surf_verts, faces, attributes = march_grid(
        verts, torch.ones(verts.shape[0]), cubes, attributes=verts
    )
    assert surf_verts.shape == (0, 3)
    assert faces.shape == (0, 3)
    assert attributes.shape == (0, 3)


def test_march_grid_invalid_input():
    verts, cubes = construct_voxel_grid(2)
    field = torch.ones(verts.shape[0])
    with pytest.raises(ValueError):
        march_grid(verts, field[:-1], cubes)
    with pytest.raises(ValueError):
        march_grid(verts, field, cubes[:, :4])
    with pytest.raises(ValueError):
        march_grid(verts[:, :2], field, cubes)
    with pytest.raises(ValueError):
        march_grid(verts, field, cubes, attributes=verts[:-1])


def test_sphere_is_closed():
    sphere = SphereSDF(center=[0.51, 0.49, 0.503], radius=0.3)
    mesh = create_3D_mesh(sphere, 16, bounds=[[0, 0, 0], [1, 1, 1]])

    assert mesh.faces.shape[0] > 0
    counts = edge_counts(mesh.faces)
    assert set(counts.values()) == {2}, "Mesh of a sphere must be closed"
    # every vertex is referenced
    assert torch.unique(mesh.faces).shape[0] == mesh.vertices.shape[0]
    assert (
        sphere(mesh.vertices).abs() < 0.02
    ).all(), "Signed Distance Function not close to zero at surface vertices"


def test_negated_sdf_gives_same_surface():
    sphere = SphereSDF(center=[0.5, 0.5, 0.5], radius=0.3)
    bounds = [[0.05, 0.05, 0.05], [0.97, 0.96, 0.95]]
    mesh = create_3D_mesh(sphere, 12, bounds=bounds)
    mesh_negated = create_3D_mesh(-sphere, 12, bounds=bounds)

    # the same edges are crossed, triangulations may differ in ambiguous cubes
    assert mesh.vertices.shape == mesh_negated.vertices.shape
    torch.testing.assert_close(
        torch.sort(mesh.vertices.sum(dim=1)).values,
        torch.sort(mesh_negated.vertices.sum(dim=1)).values,
    )


def test_attributes_are_interpolated():
    box = BoxSDF(box_size=0.3, center=(0.5, 0.5, 0.5))
    verts, cubes = construct_voxel_grid(8, bounds=[[0, 0, 0], [1, 1, 1]])
    colors = torch.cat([verts, torch.ones(verts.shape[0], 1)], dim=1)
    surf_verts, faces, surf_colors = march_grid(
        verts, box(verts), cubes, attributes=colors
    )
    assert surf_colors.shape == (surf_verts.shape[0], 4)
    torch.testing.assert_close(surf_colors[:, :3], surf_verts)
    torch.testing.assert_close(surf_colors[:, 3], torch.ones(surf_verts.shape[0]))


def test_vertices_are_differentiable():
    verts, cubes = construct_voxel_grid(4, bounds=[[0, 0, 0], [1, 1, 1]])
    field = SphereSDF(center=[0.5, 0.5, 0.5], radius=0.3)(verts).detach()
    field.requires_grad_(True)
    surf_verts, _, _ = march_grid(verts, field, cubes)
    surf_verts.sum().backward()
    assert field.grad is not None
    assert field.grad.abs().sum() > 0


def test_export(tmp_path):
    sphere = SphereSDF(center=[0.5, 0.5, 0.5], radius=0.3)
    mesh = create_3D_mesh(sphere, 8, bounds=[[0, 0, 0], [1, 1, 1]])
    gus_mesh = mesh.to_gus()
    assert isinstance(gus_mesh, gus.Faces)
    assert gus_mesh.faces.shape == tuple(mesh.faces.shape)

    export_surface_mesh(tmp_path / "out" / "sphere.vtk", mesh)
    export_surface_mesh(tmp_path / "out" / "sphere.obj", gus_mesh)
    assert (tmp_path / "out" / "sphere.vtk").exists()
    assert (tmp_path / "out" / "sphere.obj").exists()


def test_torch_surf_mesh_to_gus():
    vertices = torch.tensor(
        [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]], requires_grad=True
    )
    faces = torch.tensor([[0, 1, 2]])
    gus_mesh = torchSurfMesh(vertices, faces).to_gus()
    assert gus_mesh.vertices.shape == (3, 3)
    assert gus_mesh.faces.tolist() == [[0, 1, 2]]


if __name__ == "__main__":
    test_voxel_grid()
    test_shared_vertices_between_cubes()
    test_sphere_is_closed()
    test_attributes_are_interpolated()
