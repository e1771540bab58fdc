import pytest
from wordfind.round import Round, RoundState


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def test_lifecycle_ends_exactly_once():
    clock = FakeClock()
    ended = []
    rnd = Round(120_000, clock=clock, on_end=ended.append)
    assert rnd.state is RoundState.NOT_STARTED

    rnd.start()
    assert rnd.is_running
    assert rnd.clock_display == "2:00"

    clock.advance(61.5)
    rnd.tick()
    assert rnd.is_running
    assert rnd.clock_display == "0:58"

    clock.advance(60)
    rnd.tick()
    rnd.tick()
    rnd.end()
    assert rnd.is_over
    assert rnd.time_remaining == 0
    assert rnd.clock_display == "0:00"
    assert ended == [rnd]


def test_start_fires_hook_and_records_start_time():
    clock = FakeClock(5.0)
    started = []
    rnd = Round(1000, clock=clock, on_start=started.append)
    rnd.start()
    assert started == [rnd]
    assert rnd.start_time == 5.0


def test_cannot_start_twice():
    rnd = Round(1000, clock=FakeClock())
    rnd.start()
    with pytest.raises(RuntimeError):
        rnd.start()


def test_record_only_while_running_and_once():
    clock = FakeClock()
    rnd = Round(1000, clock=clock)
    assert not rnd.record("cat")

    rnd.start()
    assert rnd.record("cat")
    assert not rnd.record("cat")
    assert rnd.words_found == {"cat"}

    clock.advance(2)
    rnd.refresh()
    assert rnd.is_over
    assert not rnd.record("dog")
    assert rnd.words_found == {"cat"}


def test_tick_schedules_next_refresh_until_over():
    clock = FakeClock()
    scheduled = []
    rnd = Round(1000, clock=clock, schedule=scheduled.append)
    rnd.start()
    assert scheduled == [rnd.tick]

    clock.advance(0.5)
    scheduled.pop()()
    assert len(scheduled) == 1

    clock.advance(0.5)
    scheduled.pop()()
    assert rnd.is_over
    assert scheduled == []


def test_refresh_does_not_schedule():
    scheduled = []
    rnd = Round(1000, clock=FakeClock(), schedule=scheduled.append)
    rnd.start()
    scheduled.clear()
    rnd.refresh()
    assert scheduled == []


def test_abandoned_round_skips_end_hook():
    ended = []
    rnd = Round(1000, clock=FakeClock(), on_end=ended.append)
    rnd.start()
    rnd.end(notify=False)
    assert rnd.is_over
    assert ended == []


def test_no_transition_out_of_ended():
    clock = FakeClock()
    rnd = Round(1000, clock=clock)
    rnd.start()
    rnd.end()
    clock.advance(-10)
    rnd.tick()
    assert rnd.state is RoundState.ENDED
    with pytest.raises(RuntimeError):
        rnd.start()
