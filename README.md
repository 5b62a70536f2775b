# slamkit

Building blocks for feature-based visual SLAM, written with NumPy: pose
conversions, dominant-plane detection from map points, and readers for the
image sequences of common SLAM datasets.

## Modules

### `slamkit.converter`

Helpers for rigid and similarity transforms.

- `se3_matrix(R, t)` – 4x4 single-precision homogeneous transform from a 3x3
  rotation and a 3-vector translation.
- `split_se3(T)` – the rotation and translation of a 4x4 transform.
- `sim3_matrix(scale, R, t)` – 4x4 matrix of a scaled rotation plus translation.
- `to_quaternion(R)` – quaternion of a rotation matrix as `[x, y, z, w]`.
- `descriptor_rows(descriptors)` – split a descriptor matrix into its rows.

Malformed shapes raise `ValueError`.

### `slamkit.plane`

Planes fitted to tracked map points, for anchoring virtual content.

- `detect_plane(points, Tcw, iterations=50, rng=None)` – RANSAC search for the
  dominant plane. Map points are objects with a `position` (3-vector), an
  `observations` count and optionally a `bad` flag. `None` entries and points
  seen five times or fewer are skipped; `None` is returned when fewer than 50
  points remain.
- `Plane` – a fitted plane with `normal`, `origin` and the transform `Tpw`;
  `recompute()` refits it to its good points, `gl_matrix()` gives its frame
  as a column-major OpenGL matrix, and `Plane.from_normal(normal, origin, rng)`
  builds one directly.
- `exp_so3(v)` – rotation matrix of an axis-angle vector.
- `gl_column_major(T)` – the 16 entries of a pose in OpenGL order.
- `status_message(status, localization_mode)` – overlay text and RGB colour
  for tracking status 1 (not initialised), 2 (tracking) or 3 (lost).
- `plane_grid_lines(ndivs, ndivsize)` – line segments of a square grid in the
  x-z plane.
- `ImagePoseBuffer` – thread-safe holder with `set(image, Tcw, status, keys,
  points)` and `get()`, both working on copies.

### `slamkit.mono_sequences`

`MonoSequence` holds image paths and timestamps in seconds and iterates over
`(path, timestamp)` pairs.

- `load_euroc_mono(image_dir, times_file)` – nanosecond names, one per line.
- `load_kitti_mono(sequence_dir)` – `times.txt` plus `image_0/NNNNNN.png`.
- `load_tum_mono(sequence_dir)` – `rgb.txt`, skipping its three header lines.

### `slamkit.stereo_sequences`

`PairedSequence` holds two aligned path lists (`first`, `second`) and one
timestamp per pair, and iterates over `(first, second, timestamp)`.

- `load_tum_rgbd(association_file)` – colour and depth paths from a TUM
  association file.
- `indexed_rgbd_paths(root, start_index, end_index)` – `rgb_index/N.png` and
  `dep_index/N.png` for N in `[start_index, end_index)`, with N as timestamp.
- `load_euroc_stereo(left_dir, right_dir, times_file)` – left and right images
  sharing EuRoC nanosecond names.
- `load_kitti_stereo(sequence_dir)` – `image_0` (left) and `image_1` (right).

### `slamkit.timing`

- `frame_delay(timestamps, index, elapsed)` – seconds to wait after a frame so
  playback follows the recorded rate.
- `timing_summary(times)` – a `TimingSummary` with `median`, `mean`, `total`
  and `count`.

## Example

```python
import numpy as np
from slamkit.converter import se3_matrix, split_se3, to_quaternion
from slamkit.mono_sequences import load_kitti_mono
from slamkit.timing import timing_summary

T = se3_matrix(np.eye(3), [1.0, 2.0, 3.0])
R, t = split_se3(T)
print(to_quaternion(R))  # [0.0, 0.0, 0.0, 1.0]

sequence = load_kitti_mono("/data/kitti/00")
for path, stamp in sequence:
    print(stamp, path)

summary = timing_summary([0.031, 0.029, 0.035])
print(summary)
```

## What it does not do

slamkit does not read images, extract or match features, track a camera,
build or optimise a map, or draw anything. It has no command-line program and
no viewer: the sequence loaders only produce file paths and timestamps, and
`detect_plane` expects map points supplied by your own tracker.

## Installing

```
pip install .
```