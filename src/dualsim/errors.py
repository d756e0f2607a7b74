from __future__ import annotations


class DualSimError(Exception):
    """
    Base class for errors raised by dualsim.

    A failed match is never an error; it is returned as ``NoMatch``.
    """


class GraphContractError(DualSimError, ValueError):
    """
    Raised when a graph is malformed: mismatched label/adjacency lengths,
    out-of-range vertex ids or missing vertex labels.
    """


class ConfigError(DualSimError, ValueError):
    """
    Raised when a SimulationConfig holds invalid values.
    """


class RefinementBudgetExceeded(DualSimError, RuntimeError):
    """
    Raised when refinement has not converged within the configured
    number of passes.
    """

    def __init__(self, max_passes: int) -> None:
        super().__init__(
            f"refinement did not converge within {max_passes} passes"
        )
        self.max_passes = max_passes


class RefinementDiverged(DualSimError, RuntimeError):
    """
    Raised when a refinement pass prunes candidates yet leaves the
    candidate array exactly as it found it. Further passes would repeat
    forever without reaching a sound result.
    """

    def __init__(self, pass_index: int) -> None:
        super().__init__(
            f"refinement pass {pass_index} pruned candidates but reproduced "
            "its input; enable self-loop intersection to converge"
        )
        self.pass_index = pass_index
