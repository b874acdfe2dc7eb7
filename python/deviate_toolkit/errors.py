from __future__ import annotations


class DeviateError(RuntimeError):
    pass


class RejectionLimitExceeded(DeviateError):
    """A retry or rejection loop ran past its iteration cap."""

    def __init__(self, distribution: str, max_iterations: int) -> None:
        super().__init__(
            f"{distribution} sampling did not terminate within {max_iterations} iterations"
        )
        self.distribution = distribution
        self.max_iterations = int(max_iterations)
