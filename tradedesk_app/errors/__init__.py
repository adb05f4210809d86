"""
Error classification for the market data core.

Unknown symbols and zero entry prices are normal outcomes and never raise.
The exceptions below cover bad data arriving from upstream collaborators and
misuse of the simulator lifecycle or configuration.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    ConfigurationError,
    SimulatorStateError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
    "SimulatorStateError",
]
