# Tests for logging and drive metrics

import csv
import json
import logging

import pytest
from kinecar.analysis.logger import setup_logging, TelemetryLogger, SessionLogger
from kinecar.analysis.metrics import compute_drive_metrics, check_drive_health
from kinecar.core.types import WorldBounds


def _record(time, x, y, speed, steering_deg=0.0, yaw=0.0):
    return {
        "time": time,
        "x": x,
        "y": y,
        "yaw": yaw,
        "speed": speed,
        "steering_deg": steering_deg,
    }


class TestSetupLogging:

    def test_named_logger(self):
        logger = setup_logging("WARNING")
        assert logger.name == "kinecar"
        assert logger.level == logging.WARNING

    def test_repeated_calls_do_not_stack_handlers(self, temp_dir):
        setup_logging("INFO")
        logger = setup_logging("INFO", log_file=temp_dir / "logs" / "drive.log")
        assert len(logger.handlers) == 2
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in (temp_dir / "logs" / "drive.log").read_text()
        setup_logging("WARNING")


class TestTelemetryLogger:

    def test_csv_rows(self, temp_dir):
        tlog = TelemetryLogger(temp_dir)
        tlog.log(0, _record(0.1, 0.0, 1.0, 2.0))
        tlog.log(1, _record(0.2, 0.0, 2.0, 3.0))

        with open(tlog.csv_path, newline="") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 2
        assert rows[0]["step"] == "0"
        assert float(rows[1]["speed"]) == 3.0

    def test_series_and_latest(self, temp_dir):
        tlog = TelemetryLogger(temp_dir)
        for i in range(3):
            tlog.log(i, _record(i, 0.0, 0.0, float(i)))
        assert tlog.get_series("speed") == [0.0, 1.0, 2.0]
        assert tlog.get_latest("speed") == 2.0
        assert tlog.get_latest("rpm") is None

    def test_save_summary(self, temp_dir):
        tlog = TelemetryLogger(temp_dir)
        tlog.log(0, _record(0.0, 0.0, 0.0, 0.0))
        tlog.save_summary()
        with open(tlog.json_path) as f:
            data = json.load(f)
        assert data[0]["step"] == 0


class TestSessionLogger:

    def test_creates_session_dir(self, temp_dir, config):
        session = SessionLogger("unit", base_dir=temp_dir, level="WARNING")
        session.save_config(config)
        session.save_metrics({"distance": 1.0})

        assert session.session_dir.name.endswith("_unit")
        assert (session.session_dir / "config.yaml").exists()
        assert (session.session_dir / "metrics.json").exists()
        setup_logging("WARNING")


class TestDriveMetrics:

    def test_empty(self):
        assert compute_drive_metrics([]) == {}

    def test_distance_and_speed(self):
        records = [
            _record(0.0, 0.0, 0.0, 0.0),
            _record(0.5, 3.0, 4.0, -10.0, steering_deg=-20.0),
            _record(1.0, 3.0, 10.0, 5.0, steering_deg=5.0, yaw=0.5),
        ]
        metrics = compute_drive_metrics(records)
        assert metrics["ticks"] == 3
        assert metrics["duration"] == 1.0
        assert metrics["distance"] == pytest.approx(11.0)
        assert metrics["max_abs_speed"] == 10.0
        assert metrics["mean_abs_speed"] == pytest.approx(5.0)
        assert metrics["max_abs_steering_deg"] == 20.0
        assert metrics["yaw_change"] == 0.5
        assert "wall_fraction" not in metrics

    def test_wall_fraction(self):
        bounds = WorldBounds(width=10.0, height=10.0)
        records = [
            _record(0.0, 0.0, 0.0, 1.0),
            _record(0.1, 5.0, 0.0, 1.0),
            _record(0.2, 5.0, 1.0, 1.0),
            _record(0.3, 4.0, 1.0, 1.0),
        ]
        metrics = compute_drive_metrics(records, bounds)
        assert metrics["wall_fraction"] == 0.5

    def test_health_warnings(self):
        assert check_drive_health({"max_abs_speed": 10.0, "ticks": 5, "distance": 3.0}, 150.0) == []
        warnings = check_drive_health(
            {"max_abs_speed": 200.0, "wall_fraction": 0.9, "ticks": 5, "distance": 0.0},
            150.0,
        )
        assert len(warnings) == 3
