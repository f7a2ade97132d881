# Simulation host - Car body, input sources, fixed-timestep loop
# FORBIDDEN: telemetry.*, analysis.*, file I/O

from .car import CarBody, Wheel
from .inputs import Maneuver, ScriptedInput
from .loop import FixedTimestepLoop, PeriodicReporter, run_session
