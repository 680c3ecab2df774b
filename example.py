from MarchingCubes.marching_cubes import march_cube
from MarchingCubes.mesh import create_3D_mesh, export_surface_mesh
from MarchingCubes.sdf_primitives import SphereSDF, TorusSDF

edges = []
march_cube([-1.0, -1.0, -1.0, -1.0, 1.0, 1.0, 1.0, 1.0], edges.append)
print(f"Triangles on edges: {[edges[i : i + 3] for i in range(0, len(edges), 3)]}")

sdf = SphereSDF(center=[-0.4, 0.0, 0.0], radius=0.4) + TorusSDF(
    center=[0.4, 0.0, 0.0], R=0.35, r=0.1
)
mesh = create_3D_mesh(sdf, resolution=48)
export_surface_mesh("outputs/sphere_and_torus.vtk", mesh)
