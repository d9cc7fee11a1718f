"""Apply an Orientation as a local rotation.

Axis convention: roll about X, pitch about Y, yaw about Z, composed as
R = Rz(yaw) @ Ry(pitch) @ Rx(roll), right-handed, angles in degrees.
"""

import numpy as np

from skydome.models import Orientation


def rotation_matrix(orientation: Orientation) -> np.ndarray:
    """3x3 rotation matrix for an orientation."""
    roll, pitch, yaw = np.radians([orientation.roll, orientation.pitch, orientation.yaw])

    cr, sr = np.cos(roll), np.sin(roll)
    cp, sp = np.cos(pitch), np.sin(pitch)
    cy, sy = np.cos(yaw), np.sin(yaw)

    rx = np.array([[1.0, 0.0, 0.0], [0.0, cr, -sr], [0.0, sr, cr]])
    ry = np.array([[cp, 0.0, sp], [0.0, 1.0, 0.0], [-sp, 0.0, cp]])
    rz = np.array([[cy, -sy, 0.0], [sy, cy, 0.0], [0.0, 0.0, 1.0]])
    return rz @ ry @ rx


def rotate_points(points: np.ndarray, orientation: Orientation) -> np.ndarray:
    """Rotate an (N, 3) vertex array (e.g. a sky dome mesh) by an orientation.

    Raises:
        ValueError: points is not shaped (N, 3).
    """
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError(f"Expected an (N, 3) array, got shape {pts.shape}")
    return pts @ rotation_matrix(orientation).T


def forward_vector(orientation: Orientation) -> np.ndarray:
    """Where the local +X axis points after the rotation."""
    return rotation_matrix(orientation)[:, 0]
