from __future__ import annotations

from dataclasses import dataclass, field

from quant_analytics.numerics.root_finding import RootMethod

# Delta-to-strike inversion: absolute tolerance on the delta residual and on
# the log-strike bracket width, and the iteration budget of the root finder.
DELTA_TO_STRIKE_TOL: float = 1e-12
DELTA_TO_STRIKE_MAX_ITER: int = 100

# Relative bump applied to node values by finite-difference node sensitivities.
FD_NODE_BUMP: float = 1e-6


@dataclass(frozen=True, slots=True)
class RootFindingConfig:
    tol_f: float = DELTA_TO_STRIKE_TOL
    tol_x: float = DELTA_TO_STRIKE_TOL
    max_iter: int = DELTA_TO_STRIKE_MAX_ITER
    root_method: RootMethod = RootMethod.BRENT

    def __post_init__(self) -> None:
        if self.tol_f <= 0 or self.tol_x <= 0:
            raise ValueError("tol_f and tol_x must be > 0")
        if self.max_iter <= 0:
            raise ValueError("max_iter must be > 0")


@dataclass(frozen=True, slots=True)
class SmileConfig:
    """Settings for the delta smile strike computation.

    The initial log-strike bracket is ``ln F +/- bracket_std * sigma * sqrt(T)``
    and is widened if the delta residual does not change sign on it.
    """

    root: RootFindingConfig = field(default_factory=RootFindingConfig)
    bracket_std: float = 8.0
    max_bracket_steps: int = 50

    def __post_init__(self) -> None:
        if self.bracket_std <= 0:
            raise ValueError("bracket_std must be > 0")
        if self.max_bracket_steps <= 0:
            raise ValueError("max_bracket_steps must be > 0")


@dataclass(frozen=True, slots=True)
class FiniteDifferenceConfig:
    bump: float = FD_NODE_BUMP

    def __post_init__(self) -> None:
        if self.bump <= 0:
            raise ValueError("bump must be > 0")


DEFAULT_SMILE_CONFIG = SmileConfig()
DEFAULT_FD_CONFIG = FiniteDifferenceConfig()
