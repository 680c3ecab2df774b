import time
import torch
import pandas as pd
from MarchingCubes.mesh import construct_voxel_grid, march_grid
from MarchingCubes.sdf_primitives import SphereSDF, TorusSDF


def run_benchmark():
    sdf_configs = {
        "Sphere": SphereSDF(center=[0.5, 0.5, 0.5], radius=0.35),
        "Torus": TorusSDF(center=[0.5, 0.5, 0.5], R=0.3, r=0.1),
    }

    resolutions = [16, 32, 64]
    results = []

    print(f"{'SDF':<10} | {'Res':<5} | {'Faces':<8} | {'Time (s)':<10}")
    print("-" * 42)

    for name, sdf in sdf_configs.items():
        for res in resolutions:
            verts, cube_idx = construct_voxel_grid(res, bounds=[[0, 0, 0], [1, 1, 1]])
            with torch.no_grad():
                field = sdf(verts)

            start_time = time.perf_counter()
            _, faces, _ = march_grid(verts, field, cube_idx)
            end_time = time.perf_counter()

            elapsed = end_time - start_time
            results.append(
                {
                    "SDF": name,
                    "Resolution": res,
                    "Faces": faces.shape[0],
                    "Time": elapsed,
                }
            )
            print(f"{name:<10} | {res:<5} | {faces.shape[0]:<8} | {elapsed:.4f}")

    return pd.DataFrame(results)


df = run_benchmark()
df["Faces per second"] = df["Faces"] / df["Time"]
print(df.pivot_table(index="Resolution", columns="SDF", values="Faces per second"))
