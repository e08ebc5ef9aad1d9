"""
Domain Models Package
Export all domain entities
"""

from .auth import (
    FeeTerms,
    MagicLinkRecord,
    SessionClaim,
    UserProfile,
)
from .scenario import (
    DEFAULT_SCENARIO,
    FundDefaults,
    ReturnMetrics,
    SimulatorScenario,
    ValuePoint,
    WaterfallResult,
)

__all__ = [
    # Authentication
    "FeeTerms",
    "MagicLinkRecord",
    "SessionClaim",
    "UserProfile",

    # Scenarios
    "DEFAULT_SCENARIO",
    "FundDefaults",
    "ReturnMetrics",
    "SimulatorScenario",
    "ValuePoint",
    "WaterfallResult",
]
