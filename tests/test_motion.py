import math

import pytest

from raycaster.config import EngineConfig
from raycaster.grid import TileGrid
from raycaster.motion import MotionResolver, Pose

BOX = TileGrid(
    [
        [1, 1, 1],
        [1, 0, 1],
        [1, 1, 1],
    ]
)

HALL = TileGrid(
    [
        [1, 1, 1, 1, 1],
        [1, 0, 0, 0, 1],
        [1, 0, 0, 0, 1],
        [1, 0, 0, 0, 1],
        [1, 1, 1, 1, 1],
    ]
)


def test_pose_helpers_return_new_values():
    pose = Pose(1.0, 2.0, 0.5)
    assert pose.translated(0.5, -1.0) == Pose(1.5, 1.0, 0.5)
    assert pose.rotated(0.25) == Pose(1.0, 2.0, 0.75)
    assert pose.with_angle(3.0).angle == 3.0
    assert pose == Pose(1.0, 2.0, 0.5)


def test_free_move_is_exact():
    resolver = MotionResolver()
    pose = Pose(2.5, 2.5, 1.0)
    result = resolver.move(pose, 0.3, -0.2, 0.2, HALL)
    assert result == Pose(2.5 + 0.3, 2.5 + -0.2, 1.0)


def test_move_into_wall_stops_before_face():
    resolver = MotionResolver()
    result = resolver.move(Pose(1.5, 1.5), 2.0, 0.0, 0.2, BOX)
    # Wall face at x = 2 minus the radius
    assert 1.5 < result.x < 1.8
    assert result.y == 1.5
    assert not BOX.circle_blocked(result.x, result.y, 0.2)


def test_move_slides_along_wall():
    resolver = MotionResolver()
    pose = Pose(3.5, 2.0, 0.0)
    result = resolver.move(pose, 0.5, 0.405, 0.3, HALL)
    # x is blocked by the wall at x = 4, y keeps going
    assert 3.5 < result.x < 3.7
    assert result.y == pytest.approx(2.4)
    assert not HALL.circle_blocked(result.x, result.y, 0.3)


def test_move_backwards_into_wall():
    resolver = MotionResolver()
    result = resolver.move(Pose(1.5, 2.5), -1.0, 0.0, 0.2, HALL)
    assert 1.2 <= result.x < 1.5
    assert result.y == 2.5
    assert not HALL.circle_blocked(result.x, result.y, 0.2)


def test_blocked_move_stays_between_start_and_target():
    resolver = MotionResolver()
    pose = Pose(2.0, 2.0)
    dx, dy = 1.7, -1.3
    result = resolver.move(pose, dx, dy, 0.3, HALL)
    assert min(pose.x, pose.x + dx) <= result.x <= max(pose.x, pose.x + dx)
    assert min(pose.y, pose.y + dy) <= result.y <= max(pose.y, pose.y + dy)
    assert not HALL.circle_blocked(result.x, result.y, 0.3)


def test_move_keeps_heading():
    resolver = MotionResolver()
    result = resolver.move(Pose(1.5, 1.5, 2.5), 1.0, 1.0, 0.2, BOX)
    assert result.angle == 2.5


def test_move_uses_config_radius_by_default():
    resolver = MotionResolver(EngineConfig(bound_radius=0.4, slide=0.01))
    result = resolver.move(Pose(1.5, 1.5), 1.0, 0.0, grid=BOX)
    assert result.x <= 1.6
    assert not BOX.circle_blocked(result.x, result.y, 0.4)


def test_move_respects_iteration_cap():
    config = EngineConfig(slide=0.01, max_slide_steps=3)
    resolver = MotionResolver(config)
    result = resolver.move(Pose(1.5, 1.5), 2.0, 0.0, 0.2, BOX)
    assert result.x == pytest.approx(1.53)


def test_zero_move_returns_same_pose():
    resolver = MotionResolver()
    pose = Pose(1.5, 1.5, math.pi)
    assert resolver.move(pose, 0.0, 0.0, 0.2, BOX) == pose


@pytest.mark.parametrize(
    "kwargs,error",
    [
        ({"grid": None}, ValueError),
        ({"pose": (1.5, 1.5)}, TypeError),
        ({"dx": "1"}, TypeError),
        ({"radius": -0.1}, ValueError),
    ],
)
def test_move_rejects_bad_arguments(kwargs, error):
    args = {"pose": Pose(1.5, 1.5), "dx": 0.1, "dy": 0.0, "radius": 0.2, "grid": BOX}
    args.update(kwargs)
    with pytest.raises(error):
        MotionResolver().move(**args)


def test_long_move_does_not_tunnel_through_wall():
    resolver = MotionResolver()
    # The target lies off the map beyond the wall, which reads as open
    assert not BOX.circle_blocked(3.5, 1.5, 0.2)
    result = resolver.move(Pose(1.5, 1.5), 2.0, 0.0, 0.2, BOX)
    assert result.x < 1.8
