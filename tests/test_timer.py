from datetime import timedelta

import pytest

from comfykit.timer import Stopwatch, Timer


def secs(value):
    return timedelta(seconds=value)


def test_non_repeating_timer():
    t = Timer.from_seconds(10.0, False)
    t.tick(secs(0.25))
    assert t.elapsed_secs() == pytest.approx(0.25)
    assert t.duration == secs(10.0)
    assert not t.finished
    assert not t.just_finished
    assert t.times_finished == 0
    assert not t.repeating
    assert t.percent() == pytest.approx(0.025)
    assert t.percent_left() == pytest.approx(0.975)

    t.pause()
    t.tick(secs(500.0))
    assert t.elapsed_secs() == pytest.approx(0.25)
    assert t.duration == secs(10.0)
    assert not t.finished
    assert not t.just_finished
    assert t.times_finished == 0
    assert not t.repeating
    assert t.percent() == pytest.approx(0.025)
    assert t.percent_left() == pytest.approx(0.975)

    t.unpause()
    t.tick(secs(500.0))
    assert t.elapsed_secs() == pytest.approx(10.0)
    assert t.finished
    assert t.just_finished
    assert t.times_finished == 1
    assert t.percent() == pytest.approx(1.0)
    assert t.percent_left() == pytest.approx(0.0)

    t.tick(secs(1.0))
    assert t.elapsed_secs() == pytest.approx(10.0)
    assert t.finished
    assert not t.just_finished
    assert t.times_finished == 0
    assert t.percent() == pytest.approx(1.0)
    assert t.percent_left() == pytest.approx(0.0)


def test_repeating_timer():
    t = Timer.from_seconds(2.0, True)
    t.tick(secs(0.75))
    assert t.elapsed_secs() == pytest.approx(0.75)
    assert t.duration == secs(2.0)
    assert not t.finished
    assert not t.just_finished
    assert t.times_finished == 0
    assert t.repeating
    assert t.percent() == pytest.approx(0.375)
    assert t.percent_left() == pytest.approx(0.625)

    t.tick(secs(1.5))
    assert t.elapsed_secs() == pytest.approx(0.25)
    assert t.finished
    assert t.just_finished
    assert t.times_finished == 1
    assert t.percent() == pytest.approx(0.125)
    assert t.percent_left() == pytest.approx(0.875)

    t.tick(secs(1.0))
    assert t.elapsed_secs() == pytest.approx(1.25)
    assert not t.finished
    assert not t.just_finished
    assert t.times_finished == 0
    assert t.percent() == pytest.approx(0.625)
    assert t.percent_left() == pytest.approx(0.375)


def test_times_finished_repeating():
    t = Timer.from_seconds(1.0, True)
    assert t.times_finished == 0
    t.tick(secs(3.5))
    assert t.times_finished == 3
    assert t.elapsed_secs() == pytest.approx(0.5)
    assert t.finished
    assert t.just_finished
    t.tick(secs(0.2))
    assert t.times_finished == 0


def test_times_finished():
    t = Timer.from_seconds(1.0, False)
    assert t.times_finished == 0
    t.tick(secs(1.5))
    assert t.times_finished == 1
    t.tick(secs(0.5))
    assert t.times_finished == 0


def test_times_finished_precise():
    t = Timer.from_seconds(0.01, True)
    step = secs(0.333)
    t.tick(step)
    assert t.times_finished == 33
    t.tick(step)
    assert t.times_finished == 33
    t.tick(step)
    assert t.times_finished == 33
    t.tick(step)
    assert t.times_finished == 34


def test_timer_finished_example():
    t = Timer.from_seconds(1.0, False)
    t.tick(secs(1.5))
    assert t.finished
    t.tick(secs(0.5))
    assert t.finished


def test_timer_just_finished_example():
    t = Timer.from_seconds(1.0, False)
    t.tick(secs(1.5))
    assert t.just_finished
    t.tick(secs(0.5))
    assert not t.just_finished


def test_timer_elapsed_example():
    t = Timer.from_seconds(1.0, False)
    t.tick(secs(0.5))
    assert t.elapsed == secs(0.5)


def test_timer_set_elapsed_does_not_finish():
    t = Timer.from_seconds(1.0, False)
    t.elapsed = secs(2)
    assert t.elapsed == secs(2)
    assert not t.finished


def test_timer_constructor_duration():
    t = Timer(timedelta(seconds=1), False)
    assert t.duration == timedelta(seconds=1)


def test_timer_set_duration():
    t = Timer.from_seconds(1.5, False)
    t.duration = timedelta(seconds=1)
    assert t.duration == timedelta(seconds=1)


def test_timer_repeating_flag():
    t = Timer.from_seconds(1.0, True)
    assert t.repeating
    t.set_repeating(False)
    assert not t.repeating


def test_set_repeating_restarts_finished_one_shot():
    t = Timer.from_seconds(1.0, False)
    t.tick(secs(1.5))
    t.tick(secs(0.1))
    assert t.finished and not t.just_finished
    t.set_repeating(True)
    assert t.repeating
    assert not t.finished
    assert t.elapsed_secs() == 0.0


def test_tick_vs_tick_secs_agree():
    t = Timer.from_seconds(1.0, False)
    repeating = Timer.from_seconds(1.0, True)
    t.tick_secs(1.5)
    repeating.tick_secs(1.5)
    assert t.elapsed_secs() == pytest.approx(1.0)
    assert repeating.elapsed_secs() == pytest.approx(0.5)


def test_timer_pause_blocks_tick():
    t = Timer.from_seconds(1.0, False)
    t.pause()
    t.tick(secs(0.5))
    assert t.elapsed_secs() == 0.0


def test_timer_unpause_resumes():
    t = Timer.from_seconds(1.0, False)
    t.pause()
    t.tick(secs(0.5))
    t.unpause()
    t.tick(secs(0.5))
    assert t.elapsed_secs() == pytest.approx(0.5)


def test_timer_paused_state():
    t = Timer.from_seconds(1.0, False)
    assert not t.paused
    t.pause()
    assert t.paused
    t.unpause()
    assert not t.paused


def test_timer_reset():
    t = Timer.from_seconds(1.0, False)
    t.tick(secs(1.5))
    t.reset()
    assert not t.finished
    assert not t.just_finished
    assert t.elapsed_secs() == 0.0


def test_timer_reset_keeps_paused():
    t = Timer.from_seconds(1.0, False)
    t.pause()
    t.reset()
    assert t.paused


def test_timer_percent_examples():
    t = Timer.from_seconds(2.0, False)
    t.tick(secs(0.5))
    assert t.percent() == pytest.approx(0.25)
    assert t.percent_left() == pytest.approx(0.75)


def test_timer_times_finished_example():
    t = Timer.from_seconds(1.0, True)
    t.tick(secs(6.0))
    assert t.times_finished == 6
    t.tick(secs(2.0))
    assert t.times_finished == 2
    t.tick(secs(0.5))
    assert t.times_finished == 0


def test_tick_returns_timer():
    t = Timer.from_seconds(1.0, False)
    assert t.tick(secs(0.1)) is t


def test_negative_tick_rejected():
    t = Timer.from_seconds(1.0, False)
    with pytest.raises(ValueError):
        t.tick_secs(-1.0)


def test_negative_duration_rejected():
    with pytest.raises(ValueError):
        Timer.from_seconds(-1.0, False)


def test_non_timedelta_tick_rejected():
    t = Timer.from_seconds(1.0, False)
    with pytest.raises(TypeError):
        t.tick(0.5)


def test_stopwatch_doc_example():
    stopwatch = Stopwatch()
    assert stopwatch.elapsed_secs() == 0.0
    stopwatch.tick(secs(1.0))
    assert stopwatch.elapsed_secs() == pytest.approx(1.0)
    stopwatch.pause()
    stopwatch.tick(secs(1.0))
    assert stopwatch.elapsed_secs() == pytest.approx(1.0)
    stopwatch.reset()
    assert stopwatch.paused
    assert stopwatch.elapsed_secs() == 0.0


def test_stopwatch_new():
    stopwatch = Stopwatch()
    assert stopwatch.elapsed_secs() == 0.0
    assert stopwatch.paused is False


def test_stopwatch_elapsed():
    stopwatch = Stopwatch()
    stopwatch.tick(timedelta(seconds=1))
    assert stopwatch.elapsed == timedelta(seconds=1)
    assert stopwatch.elapsed_secs() == 1.0


def test_stopwatch_set_elapsed():
    stopwatch = Stopwatch()
    stopwatch.elapsed = secs(1.0)
    assert stopwatch.elapsed_secs() == 1.0


def test_stopwatch_tick():
    stopwatch = Stopwatch()
    stopwatch.tick(secs(1.5))
    assert stopwatch.elapsed_secs() == pytest.approx(1.5)


def test_stopwatch_pause():
    stopwatch = Stopwatch()
    stopwatch.pause()
    stopwatch.tick(secs(1.5))
    assert stopwatch.paused
    assert stopwatch.elapsed_secs() == 0.0


def test_stopwatch_unpause():
    stopwatch = Stopwatch()
    stopwatch.pause()
    stopwatch.tick(secs(1.0))
    stopwatch.unpause()
    stopwatch.tick(secs(1.0))
    assert not stopwatch.paused
    assert stopwatch.elapsed_secs() == pytest.approx(1.0)


def test_stopwatch_reset():
    stopwatch = Stopwatch()
    stopwatch.tick(secs(1.5))
    stopwatch.reset()
    assert stopwatch.elapsed_secs() == 0.0