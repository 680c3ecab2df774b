import torch
import pytest

from MarchingCubes.sdf_primitives import (
    SphereSDF,
    CylinderSDF,
    TorusSDF,
    PlaneSDF,
    BoxSDF,
)
from MarchingCubes.SDF import SummedSDF, NegatedSDF


@pytest.fixture
def queries():
    torch.manual_seed(42)
    return torch.rand(10, 3)


def test_sdf_primitives(queries):

    # instantiate primitives
    sphere = SphereSDF(center=[0.0, 0.0, 0.0], radius=0.5)
    cylinder_x = CylinderSDF(point=[0.0, 0.0, 0.0], axis="x", radius=0.3)
    torus = TorusSDF(center=[0.0, 0.0, 0.0], R=0.5, r=0.2)
    plane = PlaneSDF(point=[0.0, 0.0, 0.0], normal=[0.0, 1.0, 0.0])
    box = BoxSDF(box_size=0.5)

    primitives = [sphere, cylinder_x, torus, plane, box]

    for sdf in primitives:
        values = sdf(queries)
        assert values.shape == (10, 1), f"{sdf.__class__.__name__} has wrong shape"


def test_sphere_sign():
    sphere = SphereSDF(center=[0, 0, 0], radius=1.0)
    points = torch.tensor([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    torch.testing.assert_close(sphere(points), torch.tensor([[-1.0], [1.0], [0.0]]))


def test_invalid_queries():
    sphere = SphereSDF(center=[0, 0, 0], radius=1.0)
    with pytest.raises(ValueError):
        sphere(torch.zeros(4, 2))
    with pytest.raises(ValueError):
        sphere(torch.zeros(4))


def test_invalid_cylinder_axis():
    with pytest.raises(ValueError):
        CylinderSDF(point=[0, 0, 0], axis="w", radius=0.3)


def test_union(queries):
    sphere_a = SphereSDF(center=[0, 0, 0], radius=0.3)
    sphere_b = SphereSDF(center=[1, 1, 1], radius=0.3)
    union = sphere_a + sphere_b
    assert isinstance(union, SummedSDF)
    expected = torch.minimum(sphere_a(queries), sphere_b(queries))
    torch.testing.assert_close(union(queries), expected)


def test_negation(queries):
    torus = TorusSDF(center=[0.5, 0.5, 0.5], R=0.3, r=0.1)
    negated = -torus
    assert isinstance(negated, NegatedSDF)
    torch.testing.assert_close(negated(queries), -torus(queries))
    torch.testing.assert_close(
        negated._get_domain_bounds(), torus._get_domain_bounds()
    )


def test_cylinder_axes():
    point = torch.tensor([[0.0, 0.0, 2.0]])
    # the point lies on the z-axis, 2 away from the x- and y-axis
    for axis, expected in [("x", 1.7), ("y", 1.7), ("z", -0.3)]:
        cylinder = CylinderSDF(point=[0, 0, 0], axis=axis, radius=0.3)
        torch.testing.assert_close(cylinder(point), torch.tensor([[expected]]))


if __name__ == "__main__":
    queries = torch.rand(10, 3)
    test_sdf_primitives(queries)
    test_union(queries)
    test_negation(queries)
