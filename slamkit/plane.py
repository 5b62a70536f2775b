"""Planes fitted to tracked map points, for anchoring virtual content in a scene."""

from __future__ import annotations

import math
import threading
from typing import Sequence

import numpy as np

__all__ = [
    "Plane",
    "ImagePoseBuffer",
    "exp_so3",
    "gl_column_major",
    "detect_plane",
    "status_message",
    "plane_grid_lines",
]

_EPS = 1e-4
_UP = np.array([0.0, 1.0, 0.0])
_RED = (255, 0, 0)
_GREEN = (0, 255, 0)


def _vector3(v) -> np.ndarray:
    vec = np.asarray(v, dtype=np.float64).reshape(-1)
    if vec.size != 3:
        raise ValueError(f"expected 3 elements, got {vec.size}")
    return vec


def _transform(T) -> np.ndarray:
    mat = np.asarray(T, dtype=np.float64)
    if mat.shape != (4, 4):
        raise ValueError(f"transform must be 4x4, got shape {mat.shape}")
    return mat


def exp_so3(v) -> np.ndarray:
    """Rotation matrix of the axis-angle vector ``v`` (Rodrigues' formula)."""
    x, y, z = _vector3(v)
    identity = np.eye(3)
    W = np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])
    d2 = x * x + y * y + z * z
    d = math.sqrt(d2)
    if d < _EPS:
        return identity + W + 0.5 * (W @ W)
    return identity + W * math.sin(d) / d + (W @ W) * (1.0 - math.cos(d)) / d2


def gl_column_major(T) -> tuple[float, ...]:
    """The 16 entries of a pose as a column-major OpenGL matrix.

    The bottom row is forced to (0, 0, 0, 1).
    """
    mat = _transform(T)
    out = []
    for col in range(4):
        out.extend(float(mat[row, col]) for row in range(3))
        out.append(1.0 if col == 3 else 0.0)
    return tuple(out)


def status_message(status: int, localization_mode: bool):
    """Overlay text and RGB colour for a tracking status, or None if nothing is shown.

    Status 1 means not initialised, 2 tracking and 3 lost.
    """
    if status == 1:
        return "SLAM NOT INITIALIZED", _RED
    if status == 2:
        return ("LOCALIZATION ON" if localization_mode else "SLAM ON"), _GREEN
    if status == 3:
        return ("LOCALIZATION LOST" if localization_mode else "SLAM LOST"), _RED
    return None


def plane_grid_lines(ndivs: int, ndivsize: float):
    """Line segments of a square grid in the x-z plane centred at the origin."""
    if ndivs < 0:
        raise ValueError("number of grid divisions must not be negative")
    lo = -ndivs * ndivsize
    hi = ndivs * ndivsize
    segments = []
    for n in range(2 * ndivs + 1):
        step = lo + ndivsize * n
        segments.append(((step, 0.0, lo), (step, 0.0, hi)))
        segments.append(((lo, 0.0, step), (hi, 0.0, step)))
    return segments


def _random_angle(rng: np.random.Generator) -> float:
    return -3.14 / 2 + float(rng.random()) * 3.14


def _plane_frame(normal: np.ndarray, origin: np.ndarray, rang: float) -> np.ndarray:
    v = np.cross(_UP, normal)
    sa = float(np.linalg.norm(v))
    ca = float(np.dot(_UP, normal))
    ang = math.atan2(sa, ca)
    if sa > 0.0:
        axis = v * ang / sa
    elif ca >= 0.0:
        axis = np.zeros(3)
    else:
        axis = np.array([math.pi, 0.0, 0.0])
    Tpw = np.eye(4)
    Tpw[:3, :3] = exp_so3(axis) @ exp_so3(_UP * rang)
    Tpw[:3, 3] = origin
    return Tpw


def _position(point) -> np.ndarray:
    return _vector3(point.position)


def _is_bad(point) -> bool:
    return bool(getattr(point, "bad", False))


class Plane:
    """A plane fitted to map points, with a frame whose y axis is the plane normal.

    Map points are objects with a ``position`` (3-vector), an ``observations``
    count and optionally a ``bad`` flag; bad points are ignored when fitting.
    """

    def __init__(self, points: Sequence, Tcw, rng=None) -> None:
        self.points = list(points)
        self.Tcw = _transform(Tcw).copy()
        self.rang = _random_angle(np.random.default_rng(rng))
        self.normal = np.zeros(3)
        self.origin = np.zeros(3)
        self.Tpw = np.eye(4)
        self._xc = None
        self.recompute()

    @classmethod
    def from_normal(cls, normal, origin, rng=None) -> "Plane":
        """A plane through ``origin`` with the given normal and no supporting points."""
        plane = cls.__new__(cls)
        plane.points = []
        plane.Tcw = None
        plane._xc = None
        plane.normal = _vector3(normal).copy()
        plane.origin = _vector3(origin).copy()
        plane.rang = _random_angle(np.random.default_rng(rng))
        plane.Tpw = _plane_frame(plane.normal, plane.origin, plane.rang)
        return plane

    def recompute(self) -> None:
        """Refit the plane to its current good points and rebuild its frame."""
        positions = [_position(p) for p in self.points if not _is_bad(p)]
        if not positions:
            raise ValueError("no valid map points to fit a plane to")
        xyz = np.array(positions)
        A = np.hstack([xyz, np.ones((len(xyz), 1))])
        _, _, vt = np.linalg.svd(A, full_matrices=True)
        abc = vt[3, :3].copy()
        origin = xyz.mean(axis=0)

        if self._xc is None:
            if self.Tcw is None:
                raise ValueError("plane has no camera pose to orient its normal")
            R = self.Tcw[:3, :3]
            t = self.Tcw[:3, 3]
            self._xc = -R.T @ t - origin

        if float(np.dot(self._xc, abc)) > 0.0:
            abc = -abc

        self.origin = origin
        self.normal = abc / float(np.linalg.norm(abc))
        self.Tpw = _plane_frame(self.normal, self.origin, self.rang)

    def gl_matrix(self) -> tuple[float, ...]:
        """The plane frame as a column-major OpenGL matrix."""
        return gl_column_major(self.Tpw)


def detect_plane(points: Sequence, Tcw, iterations: int = 50, rng=None):
    """Find the dominant plane among well-observed map points by RANSAC.

    Points that are missing or seen five times or fewer are skipped. Returns
    None when fewer than 50 points remain.
    """
    if iterations < 1:
        raise ValueError("at least one RANSAC iteration is needed")
    rng = np.random.default_rng(rng)
    candidates = [p for p in points if p is not None and p.observations > 5]
    n = len(candidates)
    if n < 50:
        return None

    xyz = np.array([_position(p) for p in candidates])
    nth = max(int(0.2 * n), 20)
    best_dist = 1e10
    best_distances = None

    for _ in range(iterations):
        chosen = rng.choice(n, size=3, replace=False)
        A = np.hstack([xyz[chosen], np.ones((3, 1))])
        _, _, vt = np.linalg.svd(A, full_matrices=True)
        a, b, c, d = vt[3]
        f = 1.0 / math.sqrt(a * a + b * b + c * c + d * d)
        distances = np.abs(xyz @ np.array([a, b, c]) + d) * f
        median = float(np.sort(distances)[nth])
        if median < best_dist or best_distances is None:
            best_dist = median
            best_distances = distances

    threshold = 1.4 * best_dist
    inliers = [p for p, dist in zip(candidates, best_distances) if dist < threshold]
    return Plane(inliers, Tcw, rng)


class ImagePoseBuffer:
    """Thread-safe holder of the latest image, pose, status and tracked features."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._image = None
        self._Tcw = None
        self._status = 0
        self._keys: list = []
        self._points: list = []

    @staticmethod
    def _copy(array):
        return None if array is None else np.array(array, copy=True)

    def set(self, image, Tcw, status: int, keys, points) -> None:
        """Store copies of the latest tracking results."""
        with self._lock:
            self._image = self._copy(image)
            self._Tcw = self._copy(Tcw)
            self._status = int(status)
            self._keys = list(keys)
            self._points = list(points)

    def get(self):
        """Return copies as (image, Tcw, status, keys, points)."""
        with self._lock:
            return (
                self._copy(self._image),
                self._copy(self._Tcw),
                self._status,
                list(self._keys),
                list(self._points),
            )