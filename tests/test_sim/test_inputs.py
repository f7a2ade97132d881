# Tests for scripted input

import pytest
from kinecar.core.types import InputIntent
from kinecar.sim.inputs import Maneuver, ScriptedInput


class TestManeuver:

    def test_intent(self):
        m = Maneuver(duration=1.0, keys=("up", "left"))
        assert m.intent == InputIntent(throttle_forward=True, steer_left=True)

    def test_rejects_negative_duration(self):
        with pytest.raises(ValueError):
            Maneuver(duration=-1.0)

    def test_rejects_unknown_key(self):
        """Bad key names fail at construction."""
        with pytest.raises(ValueError):
            Maneuver(duration=1.0, keys=("jump",))


class TestScriptedInput:

    @pytest.fixture
    def script(self):
        return ScriptedInput([
            Maneuver(1.0, ("up",)),
            Maneuver(0.5, ("up", "right")),
            Maneuver(0.5, ()),
            Maneuver(1.0, ("down",)),
        ])

    def test_duration(self, script):
        assert script.duration == pytest.approx(3.0)

    def test_intent_at(self, script):
        assert script.intent_at(0.0) == InputIntent(throttle_forward=True)
        assert script.intent_at(1.2) == InputIntent(throttle_forward=True, steer_right=True)
        assert script.intent_at(1.7) == InputIntent.idle()
        assert script.intent_at(2.5) == InputIntent(throttle_reverse=True)

    def test_idle_after_script(self, script):
        """Past the end every tick is idle."""
        assert script.intent_at(10.0) == InputIntent.idle()

    def test_empty_script(self):
        script = ScriptedInput()
        assert script.duration == 0.0
        assert script.intent_at(0.0) == InputIntent.idle()

    def test_from_config(self):
        script = ScriptedInput.from_config([
            {"duration": 2, "keys": ["up"]},
            {"duration": 1, "keys": "left"},
            {"duration": 1},
        ])
        assert len(script.maneuvers) == 3
        assert script.intent_at(2.5) == InputIntent(steer_left=True)
        assert script.intent_at(3.5) == InputIntent.idle()

    def test_from_config_missing_duration(self):
        with pytest.raises(ValueError):
            ScriptedInput.from_config([{"keys": ["up"]}])
