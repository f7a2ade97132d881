# Input sources
# Headless stand-in for keyboard polling

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from ..core.types import InputIntent


@dataclass(frozen=True)
class Maneuver:
    """Hold a set of keys for a stretch of simulation time."""
    duration: float
    keys: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.duration < 0:
            raise ValueError(f"Maneuver duration must be non-negative, got {self.duration}")
        # Fail on bad key names here, not mid-run
        InputIntent.from_keys(self.keys)

    @property
    def intent(self) -> InputIntent:
        return InputIntent.from_keys(self.keys)


class ScriptedInput:
    """Replay a list of maneuvers back to back.

    After the script ends every tick sees an idle intent.
    """

    def __init__(self, maneuvers: Sequence[Maneuver] = ()):
        self.maneuvers: List[Maneuver] = list(maneuvers)
        self._intents = [m.intent for m in self.maneuvers]

        self._ends = []
        total = 0.0
        for m in self.maneuvers:
            total += m.duration
            self._ends.append(total)

    @property
    def duration(self) -> float:
        return self._ends[-1] if self._ends else 0.0

    def intent_at(self, time: float) -> InputIntent:
        """Held keys at a given simulation time.

        Args:
            time: Seconds since the start of the session

        Returns:
            Intent of the maneuver covering `time`, idle past the end
        """
        for end, intent in zip(self._ends, self._intents):
            if time < end:
                return intent
        return InputIntent.idle()

    @classmethod
    def from_config(cls, entries: List[Dict[str, Any]]) -> "ScriptedInput":
        """Build from config entries like {"duration": 1.5, "keys": ["up"]}."""
        maneuvers = []
        for i, entry in enumerate(entries or []):
            if "duration" not in entry:
                raise ValueError(f"maneuvers[{i}] is missing 'duration'")
            keys = entry.get("keys") or []
            if isinstance(keys, str):
                keys = [keys]
            maneuvers.append(Maneuver(duration=float(entry["duration"]), keys=tuple(keys)))
        return cls(maneuvers)
