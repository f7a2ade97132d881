# Car body: chassis pose plus the wheels it owns
# May import core.*; no file I/O

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..core.integrator import step
from ..core.math_utils import rotate_2d
from ..core.types import InputIntent, Pose, StepResult, VehicleState, WorldBounds

# Wheel offsets as fractions of (track, wheel_base) in the chassis frame
WHEEL_LAYOUT = {
    "front_left": (-0.4, 0.4),
    "front_right": (0.4, 0.4),
    "rear_left": (-0.4, -0.4),
    "rear_right": (0.4, -0.4),
}


@dataclass
class Wheel:
    """Wheel attached to the chassis."""
    name: str
    offset: Tuple[float, float]   # chassis frame, +y forward
    steerable: bool = False
    angle: float = 0.0            # relative to the chassis, rad


@dataclass
class CarBody:
    """Single controllable car.

    Owns the vehicle state, the chassis pose and four wheels. Only the
    front pair is steerable; their `angle` mirrors the steering angle
    after every tick.
    """
    state: VehicleState = field(default_factory=VehicleState)
    pose: Pose = field(default_factory=Pose)
    wheels: List[Wheel] = field(default_factory=list)

    def __post_init__(self):
        if not self.wheels:
            self.wheels = [
                Wheel(
                    name=name,
                    offset=(fx * self.state.track, fy * self.state.wheel_base),
                    steerable=name.startswith("front"),
                )
                for name, (fx, fy) in WHEEL_LAYOUT.items()
            ]
        if self.state.yaw != self.pose.yaw:
            self.state = self.state.with_dynamics(yaw=self.pose.yaw)

    @property
    def front_left(self) -> Wheel:
        return self.wheel("front_left")

    @property
    def front_right(self) -> Wheel:
        return self.wheel("front_right")

    def wheel(self, name: str) -> Wheel:
        for w in self.wheels:
            if w.name == name:
                return w
        raise KeyError(name)

    def tick(
        self,
        intent: InputIntent,
        dt: float,
        bounds: Optional[WorldBounds] = None,
    ) -> StepResult:
        """Run one integrator tick and write the results back.

        Args:
            intent: Held keys for this tick
            dt: Tick duration in seconds
            bounds: World to clamp the chassis position to

        Returns:
            The integrator output for this tick
        """
        result = step(self.state, intent, dt, pose=self.pose)
        self.state = result.state

        pose = self.pose.apply(result.delta)
        if bounds is not None:
            x, y = bounds.clamp(pose.x, pose.y)
            pose = Pose(x=x, y=y, yaw=pose.yaw)
        self.pose = pose

        self.front_left.angle = result.wheels.left
        self.front_right.angle = result.wheels.right
        return result

    def wheel_positions(self) -> dict:
        """World-space centre of each wheel."""
        positions = {}
        for w in self.wheels:
            ox, oy = rotate_2d(w.offset[0], w.offset[1], self.pose.yaw)
            positions[w.name] = (self.pose.x + ox, self.pose.y + oy)
        return positions

    def turning_circle_center(self) -> Tuple[float, float]:
        """Chassis-frame centre of the full-lock turning circle.

        Right-hand side, level with the rear axle.
        """
        return self.state.turning_radius, -self.state.wheel_base / 2.0
