"""Source adapters for the external repositories the investigator consults."""

from abs_investigator.sources.base import (
    ComplaintSource,
    EconomicSource,
    FilingSource,
    IdentifierSource,
    RegistrantSource,
    SourceUnavailableError,
    TradeSource,
)
from abs_investigator.sources.cfpb import CfpbComplaintSource
from abs_investigator.sources.fred import FredEconomicSource
from abs_investigator.sources.openfigi import OpenFigiSource
from abs_investigator.sources.sec_edgar import SecEdgarSource
from abs_investigator.sources.trace import TraceSampleSource

__all__ = [
    "ComplaintSource",
    "EconomicSource",
    "FilingSource",
    "IdentifierSource",
    "RegistrantSource",
    "SourceUnavailableError",
    "TradeSource",
    "CfpbComplaintSource",
    "FredEconomicSource",
    "OpenFigiSource",
    "SecEdgarSource",
    "TraceSampleSource",
]
