from MarchingCubes.SDF import SDFBase
import torch


class SphereSDF(SDFBase):
    def __init__(self, center, radius):
        self.center = torch.tensor(center, dtype=torch.float32)
        self.r = radius

    def _compute(self, queries: torch.Tensor) -> torch.Tensor:
        center = self.center.to(queries)
        return (torch.linalg.norm(queries - center, dim=1) - self.r).reshape(-1, 1)


class CylinderSDF(SDFBase):
    def __init__(self, point, axis, radius):
        if axis not in ("x", "y", "z"):
            raise ValueError("Axis must be 'x', 'y', or 'z'")
        self.point = torch.tensor(point, dtype=torch.float32)
        self.axis = axis
        self.r = radius

    def _compute(self, queries: torch.Tensor) -> torch.Tensor:
        diff = queries - self.point.to(queries)
        if self.axis == "x":
            dist = torch.sqrt(diff[:, 1] ** 2 + diff[:, 2] ** 2)
        elif self.axis == "y":
            dist = torch.sqrt(diff[:, 0] ** 2 + diff[:, 2] ** 2)
        else:
            dist = torch.sqrt(diff[:, 0] ** 2 + diff[:, 1] ** 2)
        return (dist - self.r).reshape(-1, 1)


class TorusSDF(SDFBase):
    def __init__(self, center, R, r):
        self.center = torch.tensor(center, dtype=torch.float32)
        self.R = R
        self.r = r

    def _compute(self, queries: torch.Tensor) -> torch.Tensor:
        p = queries - self.center.to(queries)
        q = torch.stack(
            [torch.sqrt(p[:, 0] ** 2 + p[:, 1] ** 2) - self.R, p[:, 2]], dim=1
        )
        dist = torch.linalg.norm(q, dim=1) - self.r
        return dist.reshape(-1, 1)


class PlaneSDF(SDFBase):
    def __init__(self, point, normal):
        self.point = torch.tensor(point, dtype=torch.float32)
        self.normal = torch.tensor(normal, dtype=torch.float32)
        self.normal = self.normal / torch.linalg.norm(self.normal)

    def _compute(self, queries: torch.Tensor) -> torch.Tensor:
        diff = queries - self.point.to(queries)
        return torch.matmul(diff, self.normal.to(queries)).reshape(-1, 1)


class BoxSDF(SDFBase):
    """Axis aligned cube with half edge length ``box_size``."""

    def __init__(self, box_size: float = 1, center=(0.0, 0.0, 0.0)):
        self.box_size = box_size
        self.center = torch.tensor(center, dtype=torch.float32)

    def _compute(self, queries: torch.Tensor) -> torch.Tensor:
        output = (
            torch.linalg.norm(queries - self.center.to(queries), dim=1, ord=torch.inf)
            - self.box_size
        )
        return output.reshape(-1, 1)
