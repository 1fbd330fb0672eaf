from __future__ import annotations

import pytest

from quant_analytics.config import (
    DEFAULT_FD_CONFIG,
    DEFAULT_SMILE_CONFIG,
    FiniteDifferenceConfig,
    RootFindingConfig,
    SmileConfig,
)
from quant_analytics.numerics import RootMethod


def test_defaults() -> None:
    assert DEFAULT_SMILE_CONFIG.root.root_method is RootMethod.BRENT
    assert DEFAULT_SMILE_CONFIG.root.tol_f == 1e-12
    assert DEFAULT_SMILE_CONFIG.root.max_iter == 100
    assert DEFAULT_FD_CONFIG.bump == 1e-6


@pytest.mark.parametrize(
    "factory",
    [
        lambda: RootFindingConfig(tol_f=0.0),
        lambda: RootFindingConfig(tol_x=-1.0),
        lambda: RootFindingConfig(max_iter=0),
        lambda: SmileConfig(bracket_std=0.0),
        lambda: SmileConfig(max_bracket_steps=0),
        lambda: FiniteDifferenceConfig(bump=0.0),
    ],
)
def test_invalid_settings_raise(factory) -> None:
    with pytest.raises(ValueError):
        factory()


def test_configs_are_frozen() -> None:
    with pytest.raises(AttributeError):
        DEFAULT_FD_CONFIG.bump = 1e-3  # type: ignore[misc]
