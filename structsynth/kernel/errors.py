# structsynth/kernel/errors.py
"""Error taxonomy shared by the engine port, the kernel and the generators."""

from typing import Any, Optional


class EngineError(RuntimeError):
    """Raised by an engine adapter when an external operation fails."""
    pass


class DuplicateNameError(EngineError):
    """Raised by an engine adapter when a named resource already exists."""
    pass


class GenerationError(RuntimeError):
    """
    Fatal failure of a generation run.

    The run stops at the first fatal error. Geometry that was already created
    stays in the engine document; `partial` holds the counts of what was
    created before the abort (filled in by the generation context).
    """

    def __init__(self, message: str, operation: str = "", partial: Optional[Any] = None):
        super().__init__(message)
        self.operation = operation
        self.partial = partial


class GeometryError(GenerationError):
    """Node, member, panel or restraint creation failed."""
    pass


class SectionError(GenerationError):
    """Section definition failed."""

    def __init__(self, message: str, section: str, operation: str = "define_section", partial=None):
        super().__init__(message, operation=operation, partial=partial)
        self.section = section


class LoadError(GenerationError):
    """Load pattern creation or nodal force submission failed."""
    pass


class RunPreparationError(GenerationError):
    """No load case could be flagged to run."""
    pass
