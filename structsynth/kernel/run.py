# structsynth/kernel/run.py
"""Run preparation: make sure the model has at least one load case flagged to run."""

import logging
from typing import List, Sequence

from ..config import CONFIG, SynthConfig
from ..engine.port import LoadCategory
from .errors import DuplicateNameError, EngineError, RunPreparationError

logger = logging.getLogger(__name__)


def _flag(engine, case: str) -> bool:
    try:
        engine.set_case_active(case, True)
        return True
    except EngineError as e:
        logger.warning("could not flag load case %s to run: %s", case, e)
        return False


def prepare_run(
    engine,
    derived_cases: Sequence[str] = (),
    config: SynthConfig = CONFIG,
) -> List[str]:
    """
    Flag the default gravity case, and every derived-load case, to run.

    A freshly initialized model has no case flagged, and analysis would
    refuse to start. The default case is (re)ensured first; a derived case
    that cannot be flagged falls back to flagging the default case again.

    Returns:
    --------
    List[str]
        Cases flagged active, in the order they were flagged

    Raises:
    -------
    RunPreparationError
        If no case at all could be flagged
    """
    default = config.gravity_case
    try:
        engine.ensure_load_pattern(default, LoadCategory.DEAD, 1.0)
    except DuplicateNameError:
        pass
    except EngineError as e:
        logger.warning("could not ensure default pattern %s: %s", default, e)

    active: List[str] = []
    if _flag(engine, default):
        active.append(default)

    for case in derived_cases:
        if case == default:
            continue
        if _flag(engine, case):
            active.append(case)
        elif default not in active and _flag(engine, default):
            active.append(default)

    if not active:
        raise RunPreparationError(
            f"No load case could be flagged to run (tried {default}"
            + (", " + ", ".join(derived_cases) if derived_cases else "") + ")",
            operation="set_case_active",
        )
    return active
