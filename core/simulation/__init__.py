"""Simulation package - the tick loop and its driving helpers.

- engine.py: SimulationEngine, owner of the live actor set
- fixed_step.py: FixedStepDriver (catch-up stepping) and IntervalGate

Usage:
    from core.simulation import SimulationEngine

    engine = SimulationEngine(seed=42)
    engine.spawn_for(drawing)
    events = engine.step()
"""

from core.simulation.engine import SimulationEngine
from core.simulation.fixed_step import FixedStepDriver, IntervalGate, StepBatch

__all__ = [
    "SimulationEngine",
    "FixedStepDriver",
    "IntervalGate",
    "StepBatch",
]
