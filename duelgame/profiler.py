"""Frame-time profiler with named sub-sections and a rolling history."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Optional

from duelgame.tools import perma_assert

SLOTS = 16
HISTORY_FRAMES = 80


@dataclass
class Timer:
    """Measures the time between start and end with the given clock."""

    clock: Callable[[], float] = time.perf_counter
    seconds: float = 0.0
    _started_at: Optional[float] = field(default=None, repr=False)

    def start(self) -> None:
        """Begin timing."""
        self._started_at = self.clock()

    def end(self) -> float:
        """Stop timing if running and return the last measured seconds."""
        if self._started_at is not None:
            self.seconds = self.clock() - self._started_at
            self._started_at = None
        return self.seconds


@dataclass
class SavedData:
    """One frame of history: slot 0 is the frame, the rest are sub-sections.

    ``data_ms`` holds stacked values for drawing; ``data_ms_real`` the plain times.
    """

    data_ms: list[float] = field(default_factory=lambda: [0.0] * SLOTS)
    data_ms_real: list[float] = field(default_factory=lambda: [0.0] * SLOTS)


@dataclass
class Profiler:
    """Times whole frames and named sections within them."""

    name: str = "frame"
    clock: Callable[[], float] = time.perf_counter
    pause: bool = False
    sub_profiles: dict[str, Timer] = field(default_factory=dict)
    history: deque = field(default_factory=lambda: deque(maxlen=HISTORY_FRAMES))
    main_profiler: Timer = field(init=False)

    def __post_init__(self) -> None:
        self.main_profiler = Timer(self.clock)

    def start_frame(self) -> None:
        """Start timing a frame."""
        self.main_profiler.start()

    def end_frame(self) -> None:
        """Finish the frame and record it in the history unless paused."""
        data = SavedData()
        self.main_profiler.end()
        data.data_ms[0] = self.main_profiler.seconds * 1000.0
        data.data_ms_real[0] = data.data_ms[0]

        count = len(self.sub_profiles)
        perma_assert(count < SLOTS, "too many sub profiles")

        accumulated = 0.0
        for index, timer in enumerate(self.sub_profiles.values()):
            position = count - index
            data.data_ms_real[position] = timer.end() * 1000.0
            data.data_ms[position] = data.data_ms_real[position] + accumulated
            accumulated = data.data_ms[position]

        if not self.pause:
            self.history.append(data)

    def start_sub_profile(self, name: str) -> None:
        """Start timing the section ``name``."""
        self.sub_profiles.setdefault(name, Timer(self.clock)).start()

    def end_sub_profile(self, name: str) -> None:
        """Stop timing the section ``name``; unknown names are ignored."""
        timer = self.sub_profiles.get(name)
        if timer is not None:
            timer.end()

    def set_sub_profile_manually(self, name: str, seconds: float) -> None:
        """Record a time for section ``name`` measured elsewhere."""
        timer = self.sub_profiles.setdefault(name, Timer(self.clock))
        timer.end()
        timer.seconds = seconds

    def averages(self) -> list[tuple[str, float]]:
        """Average time in ms over the history for the frame and each section.

        The first entry is the whole frame; an empty history gives an empty list.
        """
        if not self.history:
            return []
        names = [self.name, *reversed(list(self.sub_profiles))]
        frames = len(self.history)
        return [
            (label, sum(d.data_ms_real[slot] for d in self.history) / frames)
            for slot, label in enumerate(names)
        ]