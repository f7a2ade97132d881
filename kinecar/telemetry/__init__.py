# Telemetry module - Per-tick records and invariant checks
# FORBIDDEN: analysis.*, file I/O

from .state import TelemetryBuilder
from .validation import StateValidator
