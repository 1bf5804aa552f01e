"""
Per-debt-type reference data: display names, search keyword phrases, the
well-known issuers of each asset class and the delinquency series category
used for economic context.
"""

from dataclasses import dataclass

from abs_investigator.domain.models import DebtType


@dataclass(frozen=True)
class DebtTypeInfo:
    debt_type: DebtType
    display_name: str
    description: str
    keywords: str
    issuers: tuple[str, ...]
    delinquency_category: str  # mortgage / auto / creditCard / consumer


DEBT_TYPES: dict[DebtType, DebtTypeInfo] = {
    DebtType.MORTGAGE: DebtTypeInfo(
        DebtType.MORTGAGE,
        "Mortgage",
        "Residential and commercial mortgages securitized into RMBS/CMBS",
        "RMBS residential mortgage backed",
        ("Fannie Mae", "Freddie Mac", "Ginnie Mae", "JPMorgan", "Wells Fargo", "Bank of America"),
        "mortgage",
    ),
    DebtType.AUTO: DebtTypeInfo(
        DebtType.AUTO,
        "Auto Loan",
        "Vehicle loans packaged into auto loan ABS",
        "auto loan ABS securitization",
        ("Ally", "Capital One", "Santander", "Ford Credit", "Toyota Financial", "GM Financial"),
        "auto",
    ),
    DebtType.CREDIT_CARD: DebtTypeInfo(
        DebtType.CREDIT_CARD,
        "Credit Card",
        "Credit card receivables securitized into card ABS",
        "credit card ABS receivables",
        ("American Express", "Capital One", "Discover", "Synchrony", "Citi"),
        "creditCard",
    ),
    DebtType.STUDENT_LOAN: DebtTypeInfo(
        DebtType.STUDENT_LOAN,
        "Student Loan",
        "Private student loans in SLABS trusts",
        "SLABS student loan",
        ("Navient", "Nelnet", "SoFi", "Sallie Mae"),
        "consumer",
    ),
    DebtType.PERSONAL_LOAN: DebtTypeInfo(
        DebtType.PERSONAL_LOAN,
        "Personal Loan",
        "Unsecured personal loans in consumer ABS",
        "consumer loan ABS unsecured",
        ("LendingClub", "Prosper", "SoFi", "Upstart"),
        "consumer",
    ),
    DebtType.MEDICAL: DebtTypeInfo(
        DebtType.MEDICAL,
        "Medical Debt",
        "Healthcare receivables sold to collection entities",
        "medical receivables ABS",
        ("Synchrony Health", "CareCredit"),
        "consumer",
    ),
    DebtType.UTILITY: DebtTypeInfo(
        DebtType.UTILITY,
        "Utility Bill",
        "Utility receivables sold to collection trusts",
        "utility receivables securitization",
        ("Pacific Gas", "Southern California Edison"),
        "consumer",
    ),
    DebtType.TELECOM: DebtTypeInfo(
        DebtType.TELECOM,
        "Telecom",
        "Telecommunications receivables in specialty ABS",
        "telecom receivables ABS",
        ("Verizon", "AT&T"),
        "consumer",
    ),
}


def get_debt_type_info(debt_type: DebtType) -> DebtTypeInfo:
    return DEBT_TYPES[debt_type]


def get_keywords(debt_type: DebtType) -> str:
    return DEBT_TYPES[debt_type].keywords


def get_common_issuers(debt_type: DebtType) -> tuple[str, ...]:
    return DEBT_TYPES[debt_type].issuers


def get_delinquency_category(debt_type: DebtType) -> str:
    return DEBT_TYPES[debt_type].delinquency_category
