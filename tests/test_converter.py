import math

import numpy as np
import pytest

from slamkit.converter import (
    descriptor_rows,
    se3_matrix,
    sim3_matrix,
    split_se3,
    to_quaternion,
)


def _rot_z(angle):
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def _rot_x(angle):
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


def _rotate_by_quaternion(q, v):
    x, y, z, w = q
    u = np.array([x, y, z])
    return v + 2.0 * w * np.cross(u, v) + 2.0 * np.cross(u, np.cross(u, v))


def test_descriptor_rows_splits_each_row():
    desc = np.arange(12, dtype=np.uint8).reshape(3, 4)
    rows = descriptor_rows(desc)
    assert len(rows) == 3
    for original, row in zip(desc, rows):
        assert np.array_equal(original, row)
        assert row.dtype == np.uint8


def test_descriptor_rows_rejects_vector():
    with pytest.raises(ValueError):
        descriptor_rows(np.zeros(5))


def test_se3_round_trip():
    R = _rot_z(0.3) @ _rot_x(-1.1)
    t = np.array([1.5, -2.0, 0.25])
    T = se3_matrix(R, t)
    assert T.shape == (4, 4)
    assert T.dtype == np.float32
    assert np.allclose(T[3], [0, 0, 0, 1])
    R2, t2 = split_se3(T)
    assert np.allclose(R2, R, atol=1e-6)
    assert np.allclose(t2, t, atol=1e-6)


def test_se3_rejects_bad_shapes():
    with pytest.raises(ValueError):
        se3_matrix(np.eye(2), [0, 0, 0])
    with pytest.raises(ValueError):
        se3_matrix(np.eye(3), [0, 0])
    with pytest.raises(ValueError):
        split_se3(np.eye(3))


def test_sim3_scales_rotation_only():
    R = _rot_z(0.7)
    t = [0.1, 0.2, 0.3]
    T = sim3_matrix(2.5, R, t)
    assert np.allclose(T[:3, :3], 2.5 * R, atol=1e-6)
    assert np.allclose(T[:3, 3], t, atol=1e-6)
    assert np.allclose(T[3], [0, 0, 0, 1])


def test_identity_quaternion():
    assert to_quaternion(np.eye(3)) == [0.0, 0.0, 0.0, 1.0]


def test_quarter_turn_about_z():
    q = to_quaternion(_rot_z(math.pi / 2))
    half = math.sqrt(0.5)
    assert q == pytest.approx([0.0, 0.0, half, half], abs=1e-6)


def test_half_turn_about_x_uses_diagonal_branch():
    q = to_quaternion(_rot_x(math.pi))
    assert abs(q[0]) == pytest.approx(1.0, abs=1e-6)
    assert q[1:] == pytest.approx([0.0, 0.0, 0.0], abs=1e-6)


@pytest.mark.parametrize("a,b", [(0.2, 0.4), (2.9, -0.5), (-3.0, 3.0), (1.0, 2.5)])
def test_quaternion_is_unit_and_rotates_like_matrix(a, b):
    R = _rot_z(a) @ _rot_x(b)
    q = to_quaternion(R)
    assert sum(v * v for v in q) == pytest.approx(1.0, abs=1e-5)
    v = np.array([0.3, -1.2, 2.0])
    assert np.allclose(_rotate_by_quaternion(q, v), R @ v, atol=1e-5)