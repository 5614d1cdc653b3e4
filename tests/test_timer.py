from veggierun.timer import Timer


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


def test_not_started_reports_zero():
    clock = FakeClock(500)
    timer = Timer(clock)
    clock.now = 900
    assert timer.elapsed() == 0
    assert timer.is_started is False


def test_elapsed_counts_from_start():
    clock = FakeClock(1000)
    timer = Timer(clock)
    timer.start()
    clock.now = 1250
    assert timer.elapsed() == 250


def test_pause_freezes_and_unpause_resumes():
    clock = FakeClock(0)
    timer = Timer(clock)
    timer.start()
    clock.now = 100
    timer.pause()
    assert timer.is_paused is True
    clock.now = 400
    assert timer.elapsed() == 100
    timer.unpause()
    clock.now = 450
    assert timer.elapsed() == 150
    assert timer.is_paused is False


def test_pause_without_start_is_ignored():
    clock = FakeClock(0)
    timer = Timer(clock)
    timer.pause()
    assert timer.is_paused is False
    assert timer.elapsed() == 0


def test_stop_resets_flags():
    clock = FakeClock(0)
    timer = Timer(clock)
    timer.start()
    timer.pause()
    timer.stop()
    clock.now = 300
    assert (timer.is_started, timer.is_paused, timer.elapsed()) == (False, False, 0)


def test_restart_begins_a_new_count():
    clock = FakeClock(0)
    timer = Timer(clock)
    timer.start()
    clock.now = 700
    timer.start()
    clock.now = 720
    assert timer.elapsed() == 20


def test_default_clock_is_monotonic():
    timer = Timer()
    timer.start()
    first = timer.elapsed()
    second = timer.elapsed()
    assert 0 <= first <= second