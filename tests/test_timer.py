from sweeper.timer import Timer


def test_fresh_timer_reads_zero(clock):
    timer = Timer(clock=clock)
    assert timer.elapsed() == 0
    assert timer.elapsed_secs() == 0
    assert not timer.is_running()


def test_stop_freezes_and_resume_continues(clock):
    timer = Timer(clock=clock)
    timer.start()
    assert timer.is_running()
    clock.advance(1.5)
    timer.stop()
    assert not timer.is_running()
    assert timer.elapsed() == 1.5
    clock.advance(10)
    assert timer.elapsed() == 1.5
    timer.resume()
    clock.advance(2)
    assert timer.elapsed() == 3.5
    assert timer.elapsed_secs() == 3


def test_start_begins_from_zero(clock):
    timer = Timer(clock=clock)
    timer.start()
    clock.advance(4)
    timer.stop()
    timer.start()
    clock.advance(1)
    assert timer.elapsed() == 1


def test_resume_while_running_keeps_time(clock):
    timer = Timer(clock=clock)
    timer.start()
    clock.advance(2)
    timer.resume()
    clock.advance(1)
    assert timer.elapsed() == 3


def test_reset_stops_and_zeroes(clock):
    timer = Timer(clock=clock)
    timer.start()
    clock.advance(7)
    timer.reset()
    assert not timer.is_running()
    assert timer.elapsed() == 0
    timer.stop()
    assert timer.elapsed() == 0


def test_default_clock_moves_forward():
    timer = Timer()
    timer.start()
    assert timer.elapsed() >= 0
    timer.stop()
    assert timer.elapsed() == timer.elapsed()
