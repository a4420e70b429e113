# tests/test_run_preparation.py
"""
RUN PREPARATION TESTS
=====================

A blank model has no load case flagged to run, and analysis refuses to
start. Every generation therefore ends by flagging the gravity case and
the cases of any derived loads (hydrostatic, pressure, prestress).
"""

import logging

import pytest

from structsynth.engine import InMemoryEngine, LoadCategory
from structsynth.kernel.errors import EngineError, RunPreparationError
from structsynth.kernel.run import prepare_run


class RefusingEngine(InMemoryEngine):
    """Engine that refuses to flag the named cases."""

    def __init__(self, refused, **kwargs):
        super().__init__(**kwargs)
        self.refused = set(refused)

    def set_case_active(self, name, active):
        if name in self.refused:
            raise EngineError(f"case {name} is locked")
        super().set_case_active(name, active)


class TestPrepareRun:

    def test_dead_is_flagged(self):
        engine = InMemoryEngine()
        assert engine.active_cases() == []
        assert prepare_run(engine) == ["DEAD"]
        assert engine.active_cases() == ["DEAD"]
        print("✓ DEAD flagged on a blank model")

    def test_derived_cases_flagged_in_order(self):
        engine = InMemoryEngine()
        engine.ensure_load_pattern("HYDROSTATIC", LoadCategory.OTHER, 0.0)
        engine.ensure_load_pattern("INTERNAL_PRESSURE", LoadCategory.OTHER, 0.0)
        active = prepare_run(engine, ["HYDROSTATIC", "INTERNAL_PRESSURE"])
        assert active == ["DEAD", "HYDROSTATIC", "INTERNAL_PRESSURE"]

    def test_default_listed_once(self):
        engine = InMemoryEngine()
        assert prepare_run(engine, ["DEAD"]) == ["DEAD"]

    def test_missing_default_pattern_is_created(self):
        engine = InMemoryEngine(default_case="LC0")
        assert prepare_run(engine) == ["DEAD"]
        assert engine.patterns["DEAD"].category == LoadCategory.DEAD.value

    def test_unflaggable_derived_case_is_warned(self, caplog):
        engine = RefusingEngine(["HYDROSTATIC"])
        engine.ensure_load_pattern("HYDROSTATIC", LoadCategory.OTHER, 0.0)
        with caplog.at_level(logging.WARNING, logger="structsynth.kernel.run"):
            active = prepare_run(engine, ["HYDROSTATIC"])
        assert active == ["DEAD"]
        assert "HYDROSTATIC" in caplog.text

    def test_derived_case_survives_locked_default(self):
        engine = RefusingEngine(["DEAD"])
        engine.ensure_load_pattern("PRESTRESS", LoadCategory.PRESTRESS, 0.0)
        assert prepare_run(engine, ["PRESTRESS"]) == ["PRESTRESS"]

    def test_nothing_flaggable_raises(self):
        engine = RefusingEngine(["DEAD", "HYDROSTATIC"])
        with pytest.raises(RunPreparationError) as excinfo:
            prepare_run(engine, ["HYDROSTATIC"])
        assert excinfo.value.operation == "set_case_active"
        assert "HYDROSTATIC" in str(excinfo.value)
        print("✓ RunPreparationError when no case can be flagged")
