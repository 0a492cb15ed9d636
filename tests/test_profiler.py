import pytest

from duelgame.profiler import HISTORY_FRAMES, SLOTS, Profiler, SavedData, Timer
from duelgame.tools import AssertionFailure


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


def test_timer_measures_once(clock):
    t = Timer(clock)
    clock.now = 1.0
    t.start()
    clock.now = 3.0
    assert t.end() == 2.0
    clock.now = 10.0
    assert t.end() == 2.0


def test_timer_end_without_start():
    assert Timer().end() == 0.0


def test_saved_data_has_sixteen_slots():
    data = SavedData()
    assert len(data.data_ms) == SLOTS
    assert len(data.data_ms_real) == SLOTS


def test_frame_time_recorded(clock):
    p = Profiler(clock=clock)
    p.start_frame()
    clock.now = 2.0
    p.end_frame()
    frame = p.history[-1]
    assert frame.data_ms[0] == 2000.0
    assert frame.data_ms_real[0] == frame.data_ms[0]


def test_sub_profiles_stack(clock):
    p = Profiler(clock=clock)
    p.start_frame()
    p.start_sub_profile("a")
    clock.now = 1.0
    p.end_sub_profile("a")
    p.start_sub_profile("b")
    clock.now = 3.0
    p.end_sub_profile("b")
    p.end_frame()
    frame = p.history[-1]
    # first section in the highest slot, each lower slot stacked on top
    assert frame.data_ms_real[2] == 1000.0
    assert frame.data_ms_real[1] == 2000.0
    assert frame.data_ms[2] == frame.data_ms_real[2]
    assert frame.data_ms[1] == frame.data_ms_real[1] + frame.data_ms[2]
    assert frame.data_ms[0] == 3000.0


def test_unknown_sub_profile_end_is_ignored(clock):
    p = Profiler(clock=clock)
    p.end_sub_profile("missing")
    assert "missing" not in p.sub_profiles


def test_history_is_capped(clock):
    p = Profiler(clock=clock)
    for _ in range(HISTORY_FRAMES + 20):
        p.start_frame()
        p.end_frame()
    assert len(p.history) == HISTORY_FRAMES


def test_pause_stops_history(clock):
    p = Profiler(clock=clock, pause=True)
    p.start_frame()
    p.end_frame()
    assert len(p.history) == 0


def test_set_sub_profile_manually(clock):
    p = Profiler(clock=clock)
    p.set_sub_profile_manually("upload", 0.25)
    p.start_frame()
    p.end_frame()
    assert p.sub_profiles["upload"].seconds == 0.25
    assert p.history[-1].data_ms_real[1] == 250.0


def test_too_many_sub_profiles(clock):
    p = Profiler(clock=clock)
    for i in range(SLOTS):
        p.set_sub_profile_manually(f"s{i}", 0.0)
    p.start_frame()
    with pytest.raises(AssertionFailure):
        p.end_frame()


def test_fifteen_sub_profiles_fit(clock):
    p = Profiler(clock=clock)
    for i in range(SLOTS - 1):
        p.set_sub_profile_manually(f"s{i}", 0.001)
    p.start_frame()
    p.end_frame()
    frame = p.history[-1]
    assert frame.data_ms_real[SLOTS - 1] == frame.data_ms_real[1]
    assert frame.data_ms[1] >= frame.data_ms[SLOTS - 1]


def test_averages_empty():
    assert Profiler().averages() == []


def test_averages(clock):
    p = Profiler(name="main", clock=clock)
    p.set_sub_profile_manually("a", 0.5)
    p.set_sub_profile_manually("b", 0.5)
    for length in (1.0, 2.0):
        clock.now = 0.0
        p.start_frame()
        clock.now = length
        p.end_frame()
    result = p.averages()
    assert [name for name, _ in result] == ["main", "b", "a"]
    assert result[0][1] == 1500.0
    assert result[1][1] == 500.0
    assert result[2][1] == 500.0