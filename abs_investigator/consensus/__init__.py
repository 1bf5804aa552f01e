"""Multi-source fusion: evidence merging and the investigator."""

from abs_investigator.consensus.evidence import (
    CandidateTable,
    CatalogEvidence,
    ComplaintEvidence,
    EconomicEvidence,
    FilingEvidence,
    IdentifierEvidence,
    RegistrantEvidence,
    TradeEvidence,
)
from abs_investigator.consensus.investigator import MultiSourceInvestigator

__all__ = [
    "CandidateTable",
    "CatalogEvidence",
    "ComplaintEvidence",
    "EconomicEvidence",
    "FilingEvidence",
    "IdentifierEvidence",
    "RegistrantEvidence",
    "TradeEvidence",
    "MultiSourceInvestigator",
]
