from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from dynaconf import Dynaconf

from dualsim.config.constants import DEFAULTS
from dualsim.errors import ConfigError

# ---------------------------------------------------------------------
# Refinement policy
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationConfig:
    """
    Controls how the simulation refiner treats query self-loops and how
    long it may run.

    - self_loops: when a query vertex u is its own child, narrow phi[u]
      by intersection instead of replacing it outright
    - max_passes: optional cap on outer refinement passes; None means
      the refiner runs until convergence
    """

    self_loops: bool = False
    max_passes: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.self_loops, bool):
            raise ConfigError(
                f"self_loops must be a bool, got {self.self_loops!r}"
            )
        if self.max_passes is not None:
            if isinstance(self.max_passes, bool) or not isinstance(
                self.max_passes, int
            ):
                raise ConfigError(
                    f"max_passes must be an int or None, got {self.max_passes!r}"
                )
            if self.max_passes <= 0:
                raise ConfigError(
                    f"max_passes must be positive, got {self.max_passes}"
                )


# ---------------------------------------------------------------------
# Environment / file overrides
# ---------------------------------------------------------------------


def load_config(settings_files: Optional[Iterable[str]] = None) -> SimulationConfig:
    """
    Build a SimulationConfig from DUALSIM_* environment variables and
    optional settings files, falling back to DEFAULTS.
    """

    settings = Dynaconf(
        envvar_prefix="DUALSIM",
        load_dotenv=True,
        settings_files=list(settings_files or []),
    )

    max_passes = settings.get("MAX_PASSES", DEFAULTS["MAX_PASSES"])

    return SimulationConfig(
        self_loops=settings.get("SELF_LOOPS", DEFAULTS["SELF_LOOPS"]),
        max_passes=max_passes or None,
    )
