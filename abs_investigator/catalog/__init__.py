"""Static reference tables: trust shelves, servicers and debt types."""

from abs_investigator.catalog.debt_types import DEBT_TYPES, DebtTypeInfo, get_debt_type_info
from abs_investigator.catalog.servicers import SERVICER_CATALOG, ServicerRecord, find_servicer
from abs_investigator.catalog.trusts import TRUST_CATALOG, TrustTemplate, get_trust_template

__all__ = [
    "DEBT_TYPES",
    "DebtTypeInfo",
    "get_debt_type_info",
    "SERVICER_CATALOG",
    "ServicerRecord",
    "find_servicer",
    "TRUST_CATALOG",
    "TrustTemplate",
    "get_trust_template",
]
