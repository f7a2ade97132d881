# Fixed-timestep scheduling
# Runs the integrator at a fixed logical rate, decoupled from frame rate

import logging
from typing import Callable, Optional

from ..core.types import WorldBounds
from .car import CarBody
from .inputs import ScriptedInput

logger = logging.getLogger(__name__)

# Float slack when comparing accumulated time against whole ticks
_EPS = 1e-9


class FixedTimestepLoop:
    """Accumulator-based fixed-timestep clock.

    Frame time goes in, whole ticks of `1 / tick_rate` come out. The
    remainder carries over to the next frame.
    """

    def __init__(self, tick_rate: float = 120.0, max_ticks_per_frame: int = 8):
        if tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {tick_rate}")
        if max_ticks_per_frame < 1:
            raise ValueError(f"max_ticks_per_frame must be >= 1, got {max_ticks_per_frame}")
        self.tick_rate = float(tick_rate)
        self.max_ticks_per_frame = int(max_ticks_per_frame)
        self.dt = 1.0 / self.tick_rate
        self.ticks = 0
        self._accumulator = 0.0

    @property
    def time(self) -> float:
        """Simulation time covered by the ticks run so far."""
        return self.ticks * self.dt

    @property
    def alpha(self) -> float:
        """Fraction of a tick left in the accumulator, for interpolation."""
        return min(max(self._accumulator / self.dt, 0.0), 1.0)

    def advance(self, frame_time: float, tick_fn: Callable[[float], None]) -> int:
        """Feed one frame's elapsed time and run the ticks it covers.

        Args:
            frame_time: Wall-clock seconds since the previous frame
            tick_fn: Called once per tick with the fixed dt

        Returns:
            Number of ticks run
        """
        if frame_time < 0:
            raise ValueError(f"frame_time must be non-negative, got {frame_time}")

        self._accumulator += frame_time
        ran = 0
        while self._accumulator + _EPS >= self.dt:
            if ran == self.max_ticks_per_frame:
                dropped = int((self._accumulator + _EPS) // self.dt)
                logger.warning(f"Falling behind, dropping {dropped} ticks")
                self._accumulator = 0.0
                break
            tick_fn(self.dt)
            self._accumulator -= self.dt
            self.ticks += 1
            ran += 1
        return ran

    def reset(self) -> None:
        self.ticks = 0
        self._accumulator = 0.0


class PeriodicReporter:
    """Log speed and steering angle on a fixed simulation-time cadence."""

    def __init__(self, interval: float = 0.5, log: Optional[logging.Logger] = None):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.log = log or logger
        self._elapsed = 0.0
        self.reports = 0

    def update(self, car: CarBody, dt: float) -> bool:
        """Advance the timer; report if an interval just finished.

        Returns:
            True when a report was emitted this call
        """
        self._elapsed += dt
        if self._elapsed + _EPS < self.interval:
            return False
        # Fire once per call and carry only the remainder
        self._elapsed = max(self._elapsed - self.interval, 0.0) % self.interval
        if self._elapsed + _EPS >= self.interval:
            self._elapsed = 0.0
        self.reports += 1
        self.log.info(f"Speed: {car.state.speed:.2f}")
        self.log.info(f"Steering Angle (deg): {car.state.steering_deg:.2f}")
        return True


def run_session(
    car: CarBody,
    inputs: ScriptedInput,
    duration: float,
    loop: Optional[FixedTimestepLoop] = None,
    bounds: Optional[WorldBounds] = None,
    frame_rate: float = 60.0,
    reporter: Optional[PeriodicReporter] = None,
    on_tick: Optional[Callable] = None,
) -> int:
    """Drive the car headlessly for `duration` seconds of simulation time.

    Frames of `1 / frame_rate` seconds are fed to the loop; every tick
    samples the scripted input at the current simulation time.

    Args:
        car: Car to drive, updated in place
        inputs: Scripted key presses
        duration: Simulation seconds to run
        loop: Fixed-timestep clock (defaults to 120 Hz)
        bounds: World the car is confined to
        frame_rate: Simulated render rate feeding the loop
        reporter: Optional periodic diagnostics
        on_tick: Called as on_tick(time, intent, result) after each tick

    Returns:
        Number of ticks run
    """
    if duration < 0:
        raise ValueError(f"duration must be non-negative, got {duration}")
    if frame_rate <= 0:
        raise ValueError(f"frame_rate must be positive, got {frame_rate}")

    loop = loop or FixedTimestepLoop()
    bounds = bounds or WorldBounds()
    start_ticks = loop.ticks
    target_ticks = start_ticks + int(round(duration * loop.tick_rate))

    def tick(dt: float) -> None:
        time = loop.time
        intent = inputs.intent_at(time)
        result = car.tick(intent, dt, bounds)
        if reporter is not None:
            reporter.update(car, dt)
        if on_tick is not None:
            on_tick(time + dt, intent, result)

    frame_time = 1.0 / frame_rate
    logger.debug(
        f"Session: {duration:.2f}s at {loop.tick_rate:.0f} Hz, frames at {frame_rate:.0f} Hz"
    )
    while loop.ticks < target_ticks:
        remaining = (target_ticks - loop.ticks) * loop.dt
        loop.advance(min(frame_time, remaining), tick)

    return loop.ticks - start_ticks
