"""Conversions between pose representations used by the tracker."""

from __future__ import annotations

import math

import numpy as np

__all__ = [
    "descriptor_rows",
    "se3_matrix",
    "split_se3",
    "sim3_matrix",
    "to_quaternion",
]


def descriptor_rows(descriptors) -> list[np.ndarray]:
    """Split a descriptor matrix into a list of its rows (one per keypoint)."""
    matrix = np.asarray(descriptors)
    if matrix.ndim != 2:
        raise ValueError(f"descriptors must be a 2-D matrix, got {matrix.ndim} dimensions")
    return [row.copy() for row in matrix]


def _rotation(R) -> np.ndarray:
    rot = np.asarray(R, dtype=np.float64)
    if rot.shape != (3, 3):
        raise ValueError(f"rotation must be 3x3, got shape {rot.shape}")
    return rot


def _translation(t) -> np.ndarray:
    vec = np.asarray(t, dtype=np.float64).reshape(-1)
    if vec.size != 3:
        raise ValueError(f"translation must have 3 elements, got {vec.size}")
    return vec


def se3_matrix(R, t) -> np.ndarray:
    """Build a 4x4 single-precision homogeneous transform from R and t."""
    T = np.eye(4, dtype=np.float32)
    T[:3, :3] = _rotation(R)
    T[:3, 3] = _translation(t)
    return T


def split_se3(T) -> tuple[np.ndarray, np.ndarray]:
    """Return the rotation (3x3) and translation (3,) of a homogeneous transform."""
    mat = np.asarray(T, dtype=np.float64)
    if mat.shape != (4, 4):
        raise ValueError(f"transform must be 4x4, got shape {mat.shape}")
    return mat[:3, :3].copy(), mat[:3, 3].copy()


def sim3_matrix(scale: float, R, t) -> np.ndarray:
    """Build the 4x4 matrix of a similarity: scaled rotation plus translation."""
    return se3_matrix(float(scale) * _rotation(R), t)


def to_quaternion(R) -> list[float]:
    """Return the quaternion of a rotation matrix as [x, y, z, w]."""
    m = _rotation(R)
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    q = [0.0, 0.0, 0.0]
    if trace > 0.0:
        root = math.sqrt(trace + 1.0)
        w = 0.5 * root
        root = 0.5 / root
        q[0] = (m[2, 1] - m[1, 2]) * root
        q[1] = (m[0, 2] - m[2, 0]) * root
        q[2] = (m[1, 0] - m[0, 1]) * root
    else:
        i = max(range(3), key=lambda k: m[k, k])
        j = (i + 1) % 3
        k = (j + 1) % 3
        root = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
        q[i] = 0.5 * root
        root = 0.5 / root
        w = (m[k, j] - m[j, k]) * root
        q[j] = (m[j, i] + m[i, j]) * root
        q[k] = (m[k, i] + m[i, k]) * root
    return [float(np.float32(v)) for v in (q[0], q[1], q[2], w)]