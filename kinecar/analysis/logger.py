# Logging utilities

import logging
import json
import csv
from pathlib import Path
from typing import Dict, List, Any, Optional
from datetime import datetime


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for logging

    Returns:
        Configured logger
    """
    logger = logging.getLogger("kinecar")
    logger.setLevel(getattr(logging, level.upper()))

    # Repeated calls replace the handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


class TelemetryLogger:
    """Per-tick telemetry written to CSV, with a JSON dump on request."""

    def __init__(self, log_dir: Path):
        """Initialize telemetry logger.

        Args:
            log_dir: Directory for log files
        """
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.csv_path = self.log_dir / "telemetry.csv"
        self.json_path = self.log_dir / "telemetry.json"

        self._history: List[Dict[str, Any]] = []
        self._csv_initialized = False
        self._fieldnames: List[str] = []

    def log(self, step: int, record: Dict[str, Any]) -> None:
        """Log one telemetry record.

        Args:
            step: Tick index
            record: Telemetry values for the tick
        """
        row = {"step": step, **record}
        self._history.append(row)

        # Fieldnames come from the first record
        if not self._csv_initialized:
            self._fieldnames = list(row.keys())
            with open(self.csv_path, "w", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=self._fieldnames)
                writer.writeheader()
            self._csv_initialized = True

        with open(self.csv_path, "a", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=self._fieldnames, extrasaction="ignore")
            writer.writerow(row)

    @property
    def records(self) -> List[Dict[str, Any]]:
        return list(self._history)

    def save_summary(self) -> None:
        """Save complete telemetry history as JSON."""
        with open(self.json_path, "w") as f:
            json.dump(self._history, f, indent=2)

    def get_series(self, name: str) -> List[float]:
        """Get time series of one telemetry field.

        Args:
            name: Field name

        Returns:
            List of values
        """
        return [
            r.get(name)
            for r in self._history
            if name in r
        ]

    def get_latest(self, name: str) -> Optional[float]:
        """Get latest value of a field, or None."""
        for r in reversed(self._history):
            if name in r:
                return r[name]
        return None


class SessionLogger:
    """Output directory and loggers for one driving session."""

    def __init__(
        self,
        session_name: str,
        base_dir: Path = Path("runs"),
        level: str = "INFO",
    ):
        """Initialize session logger.

        Args:
            session_name: Name of the session
            base_dir: Base directory for session output
            level: Console logging level
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.session_dir = Path(base_dir) / f"{timestamp}_{session_name}"
        self.session_dir.mkdir(parents=True, exist_ok=True)

        self.logger = setup_logging(
            level=level,
            log_file=self.session_dir / "drive.log",
        )
        self.telemetry = TelemetryLogger(self.session_dir)

    def save_config(self, config: Dict[str, Any]) -> None:
        """Save the session configuration.

        Args:
            config: Configuration dict
        """
        import yaml

        config_path = self.session_dir / "config.yaml"
        with open(config_path, "w") as f:
            yaml.dump(config, f, default_flow_style=False)

    def save_metrics(self, metrics: Dict[str, float]) -> None:
        with open(self.session_dir / "metrics.json", "w") as f:
            json.dump(metrics, f, indent=2)

    def info(self, message: str) -> None:
        """Log info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log warning message."""
        self.logger.warning(message)
