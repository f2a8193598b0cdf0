"""
Configuration for quantum/classical fusion.

The defaults reproduce the reference algorithm exactly. The only knob
that changes fused numbers is ``data_scale``; the rest only affect the
diagnostics attached to a result.

Settings can be given explicitly, through presets, or read from the
environment:

- QCFUSION_DATA_SCALE: assumed spread of normalized input data
- QCFUSION_TIME_BUDGET: advisory processing budget in seconds
- QCFUSION_PARITY_TOLERANCE: mean absolute difference allowed for parity

The environment and the global configuration are opt-in. A bare
``FusionEngine()`` or ``merge()`` always uses ``FusionConfig()``; pass
``get_fusion_config()`` or ``FusionConfig.from_env()`` to use them.
"""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any
import os
import logging

from qcfusion.core.constants import (
    DATA_SCALE,
    DEFAULT_TIME_BUDGET,
    DEFAULT_PARITY_TOLERANCE,
    MIN_USABLE_CONFIDENCE,
)

logger = logging.getLogger(__name__)


@dataclass
class FusionConfig:
    """
    Configuration for the fusion engine.

    Attributes:
        data_scale: Divisor in the stability and convergence formulas.
            Inputs are assumed to be pre-normalized to roughly this spread.
        time_budget: Advisory processing budget in seconds. Exceeding it
            adds a warning to the result; nothing is aborted.
        parity_tolerance: Mean absolute difference under which the two
            aligned signals count as agreeing.
        min_usable_confidence: Overall confidence below which a result is
            flagged as not usable.
    """
    data_scale: float = DATA_SCALE
    time_budget: float = DEFAULT_TIME_BUDGET
    parity_tolerance: float = DEFAULT_PARITY_TOLERANCE
    min_usable_confidence: float = MIN_USABLE_CONFIDENCE

    def __post_init__(self):
        """Validate configuration."""
        if self.data_scale <= 0:
            raise ValueError(f"data_scale must be positive, got {self.data_scale}")
        if self.time_budget < 0:
            raise ValueError(f"time_budget must be >= 0, got {self.time_budget}")
        if self.parity_tolerance < 0:
            raise ValueError(
                f"parity_tolerance must be >= 0, got {self.parity_tolerance}"
            )
        if not 0.0 <= self.min_usable_confidence <= 1.0:
            raise ValueError(
                "min_usable_confidence must be in [0, 1], "
                f"got {self.min_usable_confidence}"
            )
        if self.data_scale != DATA_SCALE:
            logger.info(
                "Non-default data_scale=%s; fused confidences will differ "
                "from the reference algorithm", self.data_scale,
            )

    @classmethod
    def default(cls) -> "FusionConfig":
        """Default configuration."""
        return cls()

    @classmethod
    def strict(cls) -> "FusionConfig":
        """Tight parity tolerance and a higher usability bar."""
        return cls(parity_tolerance=0.001, min_usable_confidence=0.5)

    @classmethod
    def lenient(cls) -> "FusionConfig":
        """Loose parity tolerance, accepts low-confidence results."""
        return cls(parity_tolerance=0.1, min_usable_confidence=0.1)

    @classmethod
    def from_env(cls, base: Optional["FusionConfig"] = None) -> "FusionConfig":
        """
        Build a configuration from QCFUSION_* environment variables.

        Args:
            base: Configuration supplying values for unset variables

        Returns:
            FusionConfig with environment overrides applied
        """
        values = asdict(base or cls())
        env_map = {
            "QCFUSION_DATA_SCALE": "data_scale",
            "QCFUSION_TIME_BUDGET": "time_budget",
            "QCFUSION_PARITY_TOLERANCE": "parity_tolerance",
        }
        for var, key in env_map.items():
            raw = os.getenv(var)
            if raw is None or raw == "":
                continue
            try:
                values[key] = float(raw)
            except ValueError:
                raise ValueError(f"{var} must be a number, got {raw!r}") from None
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


# Global configuration
_global_config: Optional[FusionConfig] = None


def get_fusion_config() -> FusionConfig:
    """Get the global fusion configuration."""
    global _global_config
    if _global_config is None:
        _global_config = FusionConfig.from_env()
    return _global_config


def set_fusion_config(config: Optional[FusionConfig]) -> None:
    """
    Set the global fusion configuration.

    Passing None resets it; the next lookup re-reads the environment.
    """
    if config is not None and not isinstance(config, FusionConfig):
        raise TypeError(
            f"config must be FusionConfig or None, got {type(config).__name__}"
        )

    global _global_config
    _global_config = config


def configure_fusion(
    data_scale: float = DATA_SCALE,
    time_budget: float = DEFAULT_TIME_BUDGET,
    parity_tolerance: float = DEFAULT_PARITY_TOLERANCE,
    min_usable_confidence: float = MIN_USABLE_CONFIDENCE,
) -> FusionConfig:
    """
    Configure fusion settings globally.

    Example:
        >>> config = configure_fusion(time_budget=0.5, parity_tolerance=0.05)
    """
    config = FusionConfig(
        data_scale=data_scale,
        time_budget=time_budget,
        parity_tolerance=parity_tolerance,
        min_usable_confidence=min_usable_confidence,
    )
    set_fusion_config(config)
    return config
