"""Protection fee configuration."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from quoter.constants import GAS_ESTIMATES, MethodName


@dataclass(frozen=True)
class BribeConfig:
    """Gas figures used to size the protection fee.

    Attributes:
        gas_estimates: Gas used by each router entry point for a single hop
        gas_per_hop: Extra gas charged for every hop (default: 0, the
            measured estimates already cover typical routes)
    """

    gas_estimates: Mapping[MethodName, int] = field(default_factory=lambda: dict(GAS_ESTIMATES))
    gas_per_hop: int = 0


# Default configuration instance
DEFAULT_BRIBE_CONFIG = BribeConfig()
