from __future__ import annotations


class NeuroPrimeError(RuntimeError):
    """Base class for engine defects."""


class DegenerateGenerationError(NeuroPrimeError):
    """A round generator could not reach its required number of unique options.

    This is a logic defect in a generator, never a user-facing condition.
    """
