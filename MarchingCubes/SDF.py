from abc import ABC, abstractmethod
import torch

import MarchingCubes

import logging

logger = logging.getLogger(MarchingCubes.__name__)


class SDFBase(ABC):
    """Abstract base class for Signed Distance Functions.

    SDFs represent geometry as an implicit function that returns the signed
    distance from any query point to the nearest surface. Negative values
    indicate points inside the geometry, positive values indicate points
    outside, and zero indicates points on the surface. This matches the
    inside convention of :func:`MarchingCubes.marching_cubes.cube_index`.

    Notes
    -----
    Subclasses must implement:
    - ``_compute(queries)``: Calculate SDF values for query points
    - ``_get_domain_bounds()``: Return the bounding box of the geometry

    Examples
    --------
    >>> from MarchingCubes.sdf_primitives import SphereSDF
    >>> import torch
    >>>
    >>> sphere = SphereSDF(center=[0, 0, 0], radius=1.0)
    >>> points = torch.tensor([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    >>> distances = sphere(points)  # [[-1.0], [1.0]] (inside, outside)
    """

    def __call__(self, queries: torch.Tensor) -> torch.Tensor:
        """Evaluate the SDF at given query points.

        Parameters
        ----------
        queries : torch.Tensor
            Query points of shape (N, 3).

        Returns
        -------
        torch.Tensor
            Signed distance values of shape (N, 1).

        Raises
        ------
        ValueError
            If queries have invalid shape.
        RuntimeError
            If SDF computation returns invalid output.
        """
        self._validate_input(queries)
        sdf_values = self._compute(queries)
        if sdf_values is None:
            raise RuntimeError("Invalid SDF output")
        return sdf_values

    def _validate_input(self, queries: torch.Tensor):
        if queries.ndim != 2 or queries.shape[1] != 3:
            raise ValueError(f"Expected input of shape (N, 3), got {queries.shape}")

    @abstractmethod
    def _compute(self, queries: torch.Tensor) -> torch.Tensor:
        """Compute SDF values for query points.

        Parameters
        ----------
        queries : torch.Tensor
            Query points of shape (N, 3).

        Returns
        -------
        torch.Tensor
            Signed distance values of shape (N, 1).
        """
        pass

    def _get_domain_bounds(self) -> torch.Tensor:
        """Return the bounding box of the SDF's domain.

        Used as the default meshing region.

        Returns
        -------
        torch.Tensor
            Tensor of shape (2, 3), [[xmin, ymin, zmin], [xmax, ymax, zmax]].
        """
        return torch.tensor([[-1, -1, -1], [1, 1, 1]], dtype=torch.float32)

    def __add__(self, other):
        return SummedSDF(self, other)

    def __neg__(self):
        return NegatedSDF(self)


class SummedSDF(SDFBase):
    """Union of two SDFs."""

    def __init__(self, obj1: SDFBase, obj2: SDFBase):
        self.obj1 = obj1
        self.obj2 = obj2

    def _compute(self, queries):
        result1 = self.obj1._compute(queries)
        result2 = self.obj2._compute(queries)
        return torch.minimum(result1, result2)

    def _get_domain_bounds(self):
        bounds1 = self.obj1._get_domain_bounds()
        bounds2 = self.obj2._get_domain_bounds()

        lower = torch.minimum(bounds1[0], bounds2[0])
        upper = torch.maximum(bounds1[1], bounds2[1])

        return torch.stack([lower, upper], dim=0)


class NegatedSDF(SDFBase):
    """Swaps inside and outside of an SDF."""

    def __init__(self, obj: SDFBase):
        self.obj = obj

    def _compute(self, queries):
        return -self.obj._compute(queries)

    def _get_domain_bounds(self):
        return self.obj._get_domain_bounds()
