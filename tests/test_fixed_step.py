"""Tests for fixed-timestep driving and the broadcast interval gate."""

import pytest

from core.events import EatenEvent
from core.simulation import FixedStepDriver, IntervalGate

DT = 1 / 30


class StepRecorder:
    def __init__(self, events_per_step=0):
        self.calls = []
        self.events_per_step = events_per_step

    def __call__(self, dt):
        self.calls.append(dt)
        n = len(self.calls)
        return [EatenEvent(f"e{n}", f"p{n}_{i}") for i in range(self.events_per_step)]


class TestFixedStepDriver:
    def test_no_partial_steps(self):
        recorder = StepRecorder()
        driver = FixedStepDriver(recorder, DT)

        batch = driver.advance(DT * 0.5)

        assert batch.steps == 0
        assert recorder.calls == []
        assert driver.accumulator == pytest.approx(DT * 0.5)

    def test_leftover_time_carries_over(self):
        recorder = StepRecorder()
        driver = FixedStepDriver(recorder, DT)

        driver.advance(DT * 0.6)
        batch = driver.advance(DT * 0.6)

        assert batch.steps == 1
        assert driver.accumulator == pytest.approx(DT * 0.2)

    def test_catch_up_runs_every_accrued_step(self):
        recorder = StepRecorder()
        driver = FixedStepDriver(recorder, DT)

        batch = driver.advance(DT * 5 + DT * 0.1)

        assert batch.steps == 5
        assert recorder.calls == [DT] * 5
        assert driver.total_steps == 5

    def test_steps_always_use_fixed_dt(self):
        recorder = StepRecorder()
        driver = FixedStepDriver(recorder, DT)

        for elapsed in (0.013, 0.051, 0.002, 0.1, 0.033):
            driver.advance(elapsed)

        assert set(recorder.calls) == {DT}
        assert len(recorder.calls) == int((0.013 + 0.051 + 0.002 + 0.1 + 0.033) / DT)

    def test_events_are_collected_in_order(self):
        recorder = StepRecorder(events_per_step=2)
        driver = FixedStepDriver(recorder, DT)

        batch = driver.advance(DT * 2)

        assert [e.eater_id for e in batch.events] == ["e1", "e1", "e2", "e2"]

    def test_catch_up_is_limited_per_call(self):
        recorder = StepRecorder()
        driver = FixedStepDriver(recorder, DT, max_steps=10)

        batch = driver.advance(DT * 25.5)

        assert batch.steps == 10
        assert batch.backlog_steps == 15
        assert driver.accumulator == pytest.approx(DT * 15.5)

    def test_owed_steps_are_never_skipped(self):
        recorder = StepRecorder()
        driver = FixedStepDriver(recorder, DT, max_steps=30)

        batches = [driver.advance(2.0), driver.advance(0), driver.advance(0)]

        assert [b.steps for b in batches] == [30, 30, 0]
        assert driver.total_steps == 60
        assert batches[-1].backlog_steps == 0
        assert driver.accumulator < DT

    def test_negative_elapsed_is_ignored(self):
        driver = FixedStepDriver(StepRecorder(), DT)
        assert driver.advance(-1.0).steps == 0
        assert driver.accumulator == 0.0


class TestIntervalGate:
    def test_first_call_opens(self):
        assert IntervalGate(1 / 15).ready(100.0)

    def test_closed_within_interval(self):
        gate = IntervalGate(1 / 15)
        gate.ready(100.0)
        assert not gate.ready(100.03)
        assert gate.ready(100.07)

    def test_rate_never_exceeds_interval(self):
        gate = IntervalGate(1 / 15)
        opened = [t for t in (i / 30 for i in range(300)) if gate.ready(t)]

        gaps = [b - a for a, b in zip(opened, opened[1:])]
        assert all(gap >= 1 / 15 - 1e-9 for gap in gaps)
        assert 70 <= len(opened) <= 150
