"""
Reference catalog of securitization trust shelves.

Each template describes one issuing shelf (e.g. SDART for Santander Drive
Auto Receivables Trust): the debt type it securitizes, its trustee, the
vintage years it issued in and the series letters it used. The offline
candidate generator scores these templates without any network calls.
"""

from dataclasses import dataclass

from abs_investigator.domain.models import DebtType

# States covered by the West Coast focused mortgage shelves
WEST_COAST_STATES = ("CA", "WA", "OR", "AZ", "NV")


@dataclass(frozen=True)
class TrustTemplate:
    """One issuing shelf in the catalog."""

    prefix: str
    name: str
    debt_type: DebtType
    trustee: str
    years: tuple[int, ...]
    series: tuple[str, ...]
    focus_states: tuple[str, ...] = ()

    @property
    def latest_year(self) -> int:
        return max(self.years)

    def covers_year(self, year: int | None) -> bool:
        return year is not None and year in self.years


_TEMPLATES = (
    # Mortgage RMBS Trusts
    TrustTemplate(
        "CWABS",
        "Countrywide Asset-Backed Securities",
        DebtType.MORTGAGE,
        "Bank of New York Mellon",
        years=(2004, 2005, 2006, 2007, 2008),
        series=("OA", "BC", "IMC", "SD"),
    ),
    TrustTemplate(
        "GSAMP",
        "Goldman Sachs Alternative Mortgage Products",
        DebtType.MORTGAGE,
        "Deutsche Bank National Trust",
        years=(2005, 2006, 2007),
        series=("HE", "NC", "FV"),
    ),
    TrustTemplate(
        "RALI",
        "Residential Accredit Loans Inc",
        DebtType.MORTGAGE,
        "US Bank National Association",
        years=(2005, 2006, 2007, 2008),
        series=("QS", "QA", "QH", "QO"),
    ),
    TrustTemplate(
        "WMALT",
        "Washington Mutual Alternative Mortgage",
        DebtType.MORTGAGE,
        "Deutsche Bank National Trust",
        years=(2005, 2006, 2007),
        series=("AR", "OC", "IA"),
        focus_states=WEST_COAST_STATES,
    ),
    TrustTemplate(
        "JPMMT",
        "J.P. Morgan Mortgage Trust",
        DebtType.MORTGAGE,
        "US Bank National Association",
        years=(2005, 2006, 2007, 2008),
        series=("A", "B", "C", "LTV"),
    ),
    TrustTemplate(
        "CSMC",
        "Credit Suisse Mortgage Capital",
        DebtType.MORTGAGE,
        "Wells Fargo Bank",
        years=(2006, 2007, 2008),
        series=("HE", "LX", "NC"),
    ),
    TrustTemplate(
        "MSM",
        "Morgan Stanley Mortgage Loan Trust",
        DebtType.MORTGAGE,
        "Bank of New York Mellon",
        years=(2005, 2006, 2007),
        series=("AR", "SL", "IO"),
    ),
    TrustTemplate(
        "MLMI",
        "Merrill Lynch Mortgage Investors",
        DebtType.MORTGAGE,
        "Bank of New York Mellon",
        years=(2005, 2006, 2007),
        series=("HE", "NC", "AR"),
    ),
    TrustTemplate(
        "BSABS",
        "Bear Stearns Asset Backed Securities",
        DebtType.MORTGAGE,
        "Bank of New York Mellon",
        years=(2005, 2006, 2007),
        series=("HE", "AR", "EC"),
    ),
    TrustTemplate(
        "BCAP",
        "Bear Stearns ARM Trust",
        DebtType.MORTGAGE,
        "Bank of New York Mellon",
        years=(2005, 2006, 2007),
        series=("LLC",),
    ),
    TrustTemplate(
        "WAMU",
        "Washington Mutual Mortgage",
        DebtType.MORTGAGE,
        "Deutsche Bank National Trust",
        years=(2004, 2005, 2006, 2007),
        series=("AR", "HE", "MSC"),
        focus_states=WEST_COAST_STATES,
    ),
    TrustTemplate(
        "GSAA",
        "Goldman Sachs Alt-A Securities",
        DebtType.MORTGAGE,
        "Deutsche Bank National Trust",
        years=(2005, 2006, 2007),
        series=("FV", "MT", "AF"),
    ),
    TrustTemplate(
        "SARM",
        "Structured Adjustable Rate Mortgage",
        DebtType.MORTGAGE,
        "US Bank National Association",
        years=(2005, 2006, 2007),
        series=("AR", "SL"),
    ),
    TrustTemplate(
        "CWALT",
        "Countrywide Alternative Loan Trust",
        DebtType.MORTGAGE,
        "Bank of New York Mellon",
        years=(2005, 2006, 2007),
        series=("RS", "OC", "NL"),
    ),
    TrustTemplate(
        "RAST",
        "Residential Asset Securitization Trust",
        DebtType.MORTGAGE,
        "Bank of New York Mellon",
        years=(2005, 2006, 2007),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "INDX",
        "IndyMac INDX Mortgage Loan Trust",
        DebtType.MORTGAGE,
        "Deutsche Bank National Trust",
        years=(2005, 2006, 2007),
        series=("AR", "FP"),
        focus_states=WEST_COAST_STATES,
    ),
    TrustTemplate(
        "OPTM",
        "Option One Mortgage Loan Trust",
        DebtType.MORTGAGE,
        "Wells Fargo Bank",
        years=(2005, 2006, 2007),
        series=("PN", "HE", "NC"),
    ),
    TrustTemplate(
        "CARR",
        "Carrington Mortgage Loan Trust",
        DebtType.MORTGAGE,
        "Wilmington Trust",
        years=(2006, 2007, 2008),
        series=("NC", "HE", "FRE"),
    ),
    TrustTemplate(
        "NCMT",
        "New Century Mortgage Trust",
        DebtType.MORTGAGE,
        "Deutsche Bank National Trust",
        years=(2005, 2006, 2007),
        series=("HE", "NC", "SL"),
    ),
    TrustTemplate(
        "SABR",
        "Securitized Asset Backed Receivables",
        DebtType.MORTGAGE,
        "Bank of New York Mellon",
        years=(2005, 2006, 2007),
        series=("HE", "AR", "NC"),
    ),
    TrustTemplate(
        "SLSR",
        "Specialized Loan Servicing RMBS",
        DebtType.MORTGAGE,
        "US Bank National Association",
        years=(2006, 2007, 2008),
        series=("A", "B", "C"),
    ),
    # Auto Loan ABS
    TrustTemplate(
        "SDART",
        "Santander Drive Auto Receivables Trust",
        DebtType.AUTO,
        "Wilmington Trust",
        years=(2018, 2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C", "D", "E"),
    ),
    TrustTemplate(
        "DRIVE",
        "Drive Auto Receivables Trust",
        DebtType.AUTO,
        "Wilmington Trust",
        years=(2018, 2019, 2020, 2021, 2022),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "ALLY",
        "Ally Auto Receivables Trust",
        DebtType.AUTO,
        "Bank of New York Mellon",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "COAFT",
        "Capital One Auto Finance Trust",
        DebtType.AUTO,
        "Bank of New York Mellon",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "CARMX",
        "CarMax Auto Owner Trust",
        DebtType.AUTO,
        "US Bank National Association",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C", "D"),
    ),
    TrustTemplate(
        "WLAKE",
        "Westlake Automobile Receivables Trust",
        DebtType.AUTO,
        "Wilmington Trust",
        years=(2018, 2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C", "D"),
    ),
    TrustTemplate(
        "SCUSA",
        "Santander Consumer USA",
        DebtType.AUTO,
        "Wilmington Trust",
        years=(2018, 2019, 2020, 2021, 2022),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "AMCAR",
        "AmeriCredit Automobile Receivables",
        DebtType.AUTO,
        "Bank of New York Mellon",
        years=(2018, 2019, 2020, 2021, 2022),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "DT",
        "DriveTime Automotive Group Trust",
        DebtType.AUTO,
        "Wilmington Trust",
        years=(2018, 2019, 2020, 2021, 2022),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "EXTRN",
        "Exeter Automobile Receivables Trust",
        DebtType.AUTO,
        "Wilmington Trust",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C"),
    ),
    # Utility Receivables
    TrustTemplate(
        "APSUT",
        "APS Utility Receivables Trust",
        DebtType.UTILITY,
        "Wells Fargo Bank",
        years=(2019, 2020, 2021, 2022),
        series=("A", "B"),
    ),
    TrustTemplate(
        "DKEUT",
        "Duke Energy Utility Receivables",
        DebtType.UTILITY,
        "Bank of New York Mellon",
        years=(2019, 2020, 2021, 2022),
        series=("A", "B"),
    ),
    TrustTemplate(
        "PGEUR",
        "PG&E Utility Receivables",
        DebtType.UTILITY,
        "US Bank National Association",
        years=(2019, 2020, 2021, 2022),
        series=("A",),
    ),
    TrustTemplate(
        "SOUTL",
        "Southern Company Utility Trust",
        DebtType.UTILITY,
        "Wells Fargo Bank",
        years=(2019, 2020, 2021, 2022),
        series=("A", "B"),
    ),
    TrustTemplate(
        "NRGUT",
        "NRG Utility Receivables Trust",
        DebtType.UTILITY,
        "Wilmington Trust",
        years=(2020, 2021, 2022),
        series=("A",),
    ),
    # Credit Card ABS
    TrustTemplate(
        "SYNCC",
        "Synchrony Credit Card Master Note Trust",
        DebtType.CREDIT_CARD,
        "US Bank National Association",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "DCENT",
        "Discover Card Execution Note Trust",
        DebtType.CREDIT_CARD,
        "Bank of New York Mellon",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B"),
    ),
    TrustTemplate(
        "CITCC",
        "Citibank Credit Card Issuance Trust",
        DebtType.CREDIT_CARD,
        "Deutsche Bank National Trust",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C", "D"),
    ),
    TrustTemplate(
        "CHAIT",
        "Chase Issuance Trust",
        DebtType.CREDIT_CARD,
        "US Bank National Association",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "AMXCA",
        "American Express Credit Account Master Trust",
        DebtType.CREDIT_CARD,
        "Bank of New York Mellon",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B"),
    ),
    TrustTemplate(
        "COMET",
        "Capital One Multi-Asset Execution Trust",
        DebtType.CREDIT_CARD,
        "Wilmington Trust",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "GECCN",
        "GE Capital Credit Card Master Note",
        DebtType.CREDIT_CARD,
        "Deutsche Bank National Trust",
        years=(2018, 2019, 2020, 2021),
        series=("A", "B"),
    ),
    # Student Loan ABS
    TrustTemplate(
        "SLABS",
        "Student Loan Asset-Backed Securities",
        DebtType.STUDENT_LOAN,
        "Bank of New York Mellon",
        years=(2015, 2016, 2017, 2018, 2019, 2020, 2021),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "NAVSL",
        "Navient Student Loan Trust",
        DebtType.STUDENT_LOAN,
        "Wilmington Trust",
        years=(2016, 2017, 2018, 2019, 2020, 2021, 2022),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "NELLT",
        "Nelnet Student Loan Trust",
        DebtType.STUDENT_LOAN,
        "US Bank National Association",
        years=(2017, 2018, 2019, 2020, 2021, 2022),
        series=("A", "B"),
    ),
    TrustTemplate(
        "SOFSL",
        "SoFi Student Loan Trust",
        DebtType.STUDENT_LOAN,
        "Wilmington Trust",
        years=(2018, 2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "R"),
    ),
    TrustTemplate(
        "CBSLT",
        "CommonBond Student Loan Trust",
        DebtType.STUDENT_LOAN,
        "Wilmington Trust",
        years=(2019, 2020, 2021, 2022),
        series=("A", "B"),
    ),
    TrustTemplate(
        "GLSLT",
        "Great Lakes Student Loan Trust",
        DebtType.STUDENT_LOAN,
        "US Bank National Association",
        years=(2016, 2017, 2018, 2019, 2020),
        series=("A", "B"),
    ),
    TrustTemplate(
        "NCSLT",
        "National Collegiate Student Loan Trust",
        DebtType.STUDENT_LOAN,
        "Wilmington Trust",
        years=(2004, 2005, 2006, 2007),
        series=("A", "B", "C"),
    ),
    # Personal Loan ABS
    TrustTemplate(
        "LCLUB",
        "LendingClub Receivables Trust",
        DebtType.PERSONAL_LOAN,
        "Wilmington Trust",
        years=(2018, 2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "PROSP",
        "Prosper Marketplace Issuance Trust",
        DebtType.PERSONAL_LOAN,
        "Wilmington Trust",
        years=(2018, 2019, 2020, 2021, 2022),
        series=("A", "B"),
    ),
    TrustTemplate(
        "SOFPL",
        "SoFi Consumer Loan Program Trust",
        DebtType.PERSONAL_LOAN,
        "Wilmington Trust",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "UPST",
        "Upstart Securitization Trust",
        DebtType.PERSONAL_LOAN,
        "Wilmington Trust",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "AVANT",
        "Avant Loans Funding Trust",
        DebtType.PERSONAL_LOAN,
        "Bank of New York Mellon",
        years=(2018, 2019, 2020, 2021, 2022),
        series=("A", "B"),
    ),
    TrustTemplate(
        "GSPL",
        "Goldman Sachs Personal Loan Trust",
        DebtType.PERSONAL_LOAN,
        "Bank of New York Mellon",
        years=(2020, 2021, 2022, 2023),
        series=("A", "B"),
    ),
    # Medical Debt
    TrustTemplate(
        "PRAA",
        "PRA Group Medical Receivables Trust",
        DebtType.MEDICAL,
        "Wilmington Trust",
        years=(2019, 2020, 2021, 2022),
        series=("A", "B"),
    ),
    TrustTemplate(
        "ECMG",
        "Encore Medical Group Trust",
        DebtType.MEDICAL,
        "US Bank National Association",
        years=(2019, 2020, 2021, 2022),
        series=("A", "B"),
    ),
    TrustTemplate(
        "MDCBS",
        "Medical Debt Collection ABS",
        DebtType.MEDICAL,
        "Wilmington Trust",
        years=(2019, 2020, 2021, 2022),
        series=("A",),
    ),
    TrustTemplate(
        "CVGHC",
        "Convergent Healthcare Receivables Trust",
        DebtType.MEDICAL,
        "Bank of New York Mellon",
        years=(2020, 2021, 2022),
        series=("A", "B"),
    ),
    TrustTemplate(
        "R1RCM",
        "R1 RCM Medical Receivables Trust",
        DebtType.MEDICAL,
        "US Bank National Association",
        years=(2020, 2021, 2022, 2023),
        series=("A", "B"),
    ),
    # Telecom Receivables
    TrustTemplate(
        "ATTRC",
        "AT&T Receivables Corporation",
        DebtType.TELECOM,
        "Bank of New York Mellon",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B"),
    ),
    TrustTemplate(
        "VZWRC",
        "Verizon Wireless Receivables Trust",
        DebtType.TELECOM,
        "US Bank National Association",
        years=(2019, 2020, 2021, 2022, 2023),
        series=("A", "B", "C"),
    ),
    TrustTemplate(
        "TMORC",
        "T-Mobile Receivables Trust",
        DebtType.TELECOM,
        "Wilmington Trust",
        years=(2020, 2021, 2022, 2023),
        series=("A", "B"),
    ),
    TrustTemplate(
        "SPTRC",
        "Sprint Receivables Corporation",
        DebtType.TELECOM,
        "Wilmington Trust",
        years=(2018, 2019, 2020),
        series=("A", "B"),
    ),
    TrustTemplate(
        "CMCRC",
        "Comcast Cable Receivables Trust",
        DebtType.TELECOM,
        "Bank of New York Mellon",
        years=(2019, 2020, 2021, 2022),
        series=("A", "B"),
    ),
)

TRUST_CATALOG: dict[str, TrustTemplate] = {t.prefix: t for t in _TEMPLATES}


def get_trust_template(prefix: str) -> TrustTemplate | None:
    """Look up a shelf by prefix (case-insensitive)."""
    return TRUST_CATALOG.get(prefix.upper()) if prefix else None
