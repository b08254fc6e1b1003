import math

import numpy as np
import pytest

from raycaster.camera import Camera
from raycaster.config import EngineConfig
from raycaster.grid import TileGrid
from raycaster.motion import Pose
from raycaster.ray import MISS, Face

BOX = TileGrid(
    [
        [1, 1, 1],
        [1, 0, 1],
        [1, 1, 1],
    ]
)


def make_camera(grid=BOX, pose=Pose(1.5, 1.5, 0.0), width=8, fov=math.pi / 2):
    return Camera(grid, pose, width, EngineConfig(fov=fov))


def test_scan_covers_every_column():
    camera = make_camera()
    samples = camera.scan()
    assert [s.column for s in samples] == list(range(8))
    assert all(s.result for s in samples)


def test_centre_column_looks_straight_ahead():
    camera = make_camera()
    centre = camera.scan()[4]
    assert centre.angle == pytest.approx(0.0)
    assert centre.heading == pytest.approx(0.0)
    assert centre.result.point == pytest.approx((2.0, 1.5))
    assert centre.result.face == Face.WEST
    assert centre.distance == pytest.approx(0.5)


def test_flat_wall_has_constant_depth():
    camera = make_camera()
    camera.scan()
    # Every column sees the wall at x = 2 at perpendicular distance 0.5
    assert np.allclose(camera.depth_buffer, 0.5)


def test_wall_heights_from_depth_buffer():
    camera = make_camera()
    camera.scan()
    heights = camera.wall_heights(100)
    assert heights.dtype == np.int32
    assert list(heights) == [100] * 8
    camera.depth_buffer[:] = 4.0
    assert list(camera.wall_heights(100)) == [25] * 8


def test_open_grid_columns_miss():
    open_grid = TileGrid([[0, 0], [0, 0]])
    camera = make_camera(grid=open_grid, pose=Pose(0.5, 0.5, 1.0))
    samples = camera.scan()
    assert all(s.result is MISS for s in samples)
    assert np.all(np.isinf(camera.depth_buffer))
    assert list(camera.wall_heights(100)) == [0] * 8


def test_sync_and_scan_leave_view_pose_alone():
    camera = make_camera()
    moved = Pose(1.2, 1.4, math.pi)
    camera.sync(moved)
    samples = camera.scan()
    assert camera.pose == moved
    assert camera.scan_pose == moved
    assert samples[4].result.face == Face.EAST


def test_set_fov_validates_range():
    camera = make_camera()
    camera.set_fov(math.radians(70))
    assert camera.fov == pytest.approx(math.radians(70))
    with pytest.raises(ValueError):
        camera.set_fov(math.radians(120))


def test_camera_rejects_bad_width():
    with pytest.raises(ValueError):
        Camera(BOX, Pose(1.5, 1.5), 0)


def test_scan_restores_scan_pose_to_view_pose():
    pose = Pose(1.5, 1.5, 0.25)
    camera = make_camera(pose=pose)
    samples = camera.scan()
    assert samples[-1].heading != pose.angle
    assert camera.scan_pose == pose
