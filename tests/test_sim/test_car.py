# Tests for the car body

import pytest
import numpy as np
from kinecar.core.types import InputIntent, Pose, WorldBounds
from kinecar.sim.car import CarBody


class TestCarBody:

    def test_owns_four_wheels(self, car):
        """Four wheels, only the front pair steerable."""
        names = [w.name for w in car.wheels]
        assert names == ["front_left", "front_right", "rear_left", "rear_right"]
        assert [w.steerable for w in car.wheels] == [True, True, False, False]

    def test_wheel_layout(self, car):
        """Wheel offsets scale with track and wheel base."""
        assert car.front_left.offset == pytest.approx((-12.0, 20.0))
        assert car.front_right.offset == pytest.approx((12.0, 20.0))
        assert car.wheel("rear_right").offset == pytest.approx((12.0, -20.0))

    def test_unknown_wheel(self, car):
        with pytest.raises(KeyError):
            car.wheel("spare")

    def test_tick_moves_forward(self, car, bounds, dt):
        result = car.tick(InputIntent(throttle_forward=True), dt, bounds)
        assert car.state is result.state
        assert car.pose.x == 0.0
        assert car.pose.y == pytest.approx(result.state.speed * dt)

    def test_front_wheels_follow_steering(self, car, bounds, dt):
        """Steering angle is written to both front wheels."""
        for _ in range(10):
            car.tick(InputIntent(steer_right=True), dt, bounds)
        assert car.state.steering_angle < 0
        assert car.front_left.angle == car.state.steering_angle
        assert car.front_right.angle == car.state.steering_angle
        assert car.wheel("rear_left").angle == 0.0

    def test_pose_yaw_tracks_state_yaw(self, car, bounds, dt):
        intent = InputIntent(throttle_forward=True, steer_left=True)
        for _ in range(120):
            car.tick(intent, dt, bounds)
        assert car.pose.yaw > 0
        assert car.pose.yaw == pytest.approx(car.state.yaw)

    def test_initial_pose_yaw_synced(self, vehicle):
        car = CarBody(state=vehicle, pose=Pose(yaw=1.0))
        assert car.state.yaw == 1.0

    def test_clamped_on_violated_axis_only(self, vehicle, bounds):
        """Crossing the right wall stops at x = W/2; y moves freely."""
        state = vehicle.with_dynamics(speed=150.0)
        car = CarBody(state=state, pose=Pose(x=590.0, y=0.0, yaw=-np.pi / 4))

        result = car.tick(InputIntent(throttle_forward=True), 0.5, bounds)

        assert result.delta.dx > 10.0
        assert car.pose.x == 600.0
        assert car.pose.y == pytest.approx(0.0 + result.delta.dy)
        assert car.pose.y > 0

    def test_clamped_on_both_axes(self, vehicle):
        bounds = WorldBounds(width=100.0, height=100.0)
        state = vehicle.with_dynamics(speed=150.0)
        car = CarBody(state=state, pose=Pose(x=-45.0, y=-45.0, yaw=3 * np.pi / 4))

        car.tick(InputIntent(throttle_forward=True), 1.0, bounds)

        assert car.pose.x == -50.0
        assert car.pose.y == -50.0

    def test_wall_keeps_speed(self, vehicle, bounds):
        """Hitting the wall does not zero the speed."""
        state = vehicle.with_dynamics(speed=150.0)
        car = CarBody(state=state, pose=Pose(x=0.0, y=399.0))
        car.tick(InputIntent(throttle_forward=True), 0.1, bounds)
        assert car.pose.y == 400.0
        assert car.state.speed == 150.0

    def test_no_bounds_no_clamp(self, vehicle):
        state = vehicle.with_dynamics(speed=150.0)
        car = CarBody(state=state, pose=Pose(x=0.0, y=399.0))
        car.tick(InputIntent(throttle_forward=True), 1.0)
        assert car.pose.y == pytest.approx(549.0)

    def test_wheel_positions_rotate_with_chassis(self, vehicle):
        car = CarBody(state=vehicle, pose=Pose(x=10.0, y=5.0, yaw=np.pi / 2))
        x, y = car.wheel_positions()["front_left"]
        # (-12, 20) rotated a quarter turn is (-20, -12)
        assert x == pytest.approx(-10.0)
        assert y == pytest.approx(-7.0)

    def test_turning_circle_center(self, car):
        cx, cy = car.turning_circle_center()
        assert cx == pytest.approx(car.state.turning_radius)
        assert cy == -25.0
