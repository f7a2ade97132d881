# Analysis module - Logging, metrics
# IMPURE - Has side effects (file I/O, logging)

from .logger import setup_logging, TelemetryLogger, SessionLogger
from .metrics import compute_drive_metrics, check_drive_health
