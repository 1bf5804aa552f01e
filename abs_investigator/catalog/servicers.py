"""
Reference catalog of loan servicers.

Maps each known servicer to the trust shelves it services, which feeds the
servicer-to-known-prefix signal of the offline candidate generator.
"""

from dataclasses import dataclass

from abs_investigator.domain.models import DebtType
from abs_investigator.domain.validation import normalize_name


@dataclass(frozen=True)
class ServicerRecord:
    servicer_id: str
    name: str
    debt_type: DebtType
    address: str
    trust_prefixes: tuple[str, ...] = ()


_SERVICERS = (
    # Mortgage
    ServicerRecord(
        "nationstar",
        "Nationstar Mortgage (Mr. Cooper)",
        DebtType.MORTGAGE,
        "8950 Cypress Waters Blvd, Coppell, TX 75019",
        trust_prefixes=("RMBS", "GSAMP", "CWABS", "RALI", "GSAA"),
    ),
    ServicerRecord(
        "ocwen",
        "Ocwen Loan Servicing",
        DebtType.MORTGAGE,
        "1661 Worthington Rd, West Palm Beach, FL 33409",
        trust_prefixes=("WAMU", "WMALT", "INDX", "OPTM"),
    ),
    ServicerRecord(
        "shellpoint",
        "Shellpoint Mortgage Servicing",
        DebtType.MORTGAGE,
        "55 Beattie Place, Greenville, SC 29601",
        trust_prefixes=("RMBS", "JPMMT", "CSMC", "BSABS"),
    ),
    ServicerRecord(
        "phh",
        "PHH Mortgage",
        DebtType.MORTGAGE,
        "1 Mortgage Way, Mt Laurel, NJ 08054",
        trust_prefixes=("MSM", "MLMI", "CWABS", "RAST"),
    ),
    ServicerRecord(
        "sps",
        "Select Portfolio Servicing",
        DebtType.MORTGAGE,
        "3217 S Decker Lake Dr, Salt Lake City, UT 84119",
        trust_prefixes=("BCAP", "SARM", "CWALT", "GSAMP"),
    ),
    ServicerRecord(
        "carrington",
        "Carrington Mortgage Services",
        DebtType.MORTGAGE,
        "1600 S Douglass Rd, Anaheim, CA 92806",
        trust_prefixes=("CARR", "NCMT", "SABR", "CSMC"),
    ),
    ServicerRecord(
        "cenlar",
        "Cenlar FSB",
        DebtType.MORTGAGE,
        "425 Phillips Blvd, Ewing, NJ 08618",
        trust_prefixes=("RMBS", "GSAMP", "CWABS"),
    ),
    ServicerRecord(
        "specialized",
        "Specialized Loan Servicing",
        DebtType.MORTGAGE,
        "8742 Lucent Blvd, Highlands Ranch, CO 80129",
        trust_prefixes=("SLSR", "RMBS", "GSAMP"),
    ),
    ServicerRecord(
        "bsi",
        "BSI Financial Services",
        DebtType.MORTGAGE,
        "314 S Franklin St, Titusville, PA 16354",
        trust_prefixes=("RMBS", "CWABS", "GSAMP"),
    ),
    # Auto
    ServicerRecord(
        "santander",
        "Santander Consumer USA",
        DebtType.AUTO,
        "1601 Elm St, Dallas, TX 75201",
        trust_prefixes=("SDART", "DRIVE", "SCUSA"),
    ),
    ServicerRecord(
        "ally",
        "Ally Financial",
        DebtType.AUTO,
        "500 Woodward Ave, Detroit, MI 48226",
        trust_prefixes=("ALLY", "AMCAR", "GMCA"),
    ),
    ServicerRecord(
        "capital_one",
        "Capital One Auto Finance",
        DebtType.AUTO,
        "15000 Capital One Dr, Richmond, VA 23238",
        trust_prefixes=("COAFT", "COMT"),
    ),
    ServicerRecord(
        "carmax",
        "CarMax Auto Finance",
        DebtType.AUTO,
        "12800 Tuckahoe Creek Pkwy, Richmond, VA 23238",
        trust_prefixes=("CARMX",),
    ),
    ServicerRecord(
        "westlake",
        "Westlake Financial",
        DebtType.AUTO,
        "4751 Wilshire Blvd, Los Angeles, CA 90010",
        trust_prefixes=("WLAKE", "DT"),
    ),
    ServicerRecord(
        "exeter",
        "Exeter Finance",
        DebtType.AUTO,
        "225 N Pottstown Pike, Exton, PA 19341",
        trust_prefixes=("EXTRN", "EXETER"),
    ),
    # Utility
    ServicerRecord(
        "aps",
        "Arizona Public Service",
        DebtType.UTILITY,
        "400 N 5th St, Phoenix, AZ 85004",
        trust_prefixes=("APSUT",),
    ),
    ServicerRecord(
        "duke",
        "Duke Energy",
        DebtType.UTILITY,
        "526 S Church St, Charlotte, NC 28202",
        trust_prefixes=("DKEUT",),
    ),
    ServicerRecord(
        "pge",
        "Pacific Gas and Electric",
        DebtType.UTILITY,
        "77 Beale St, San Francisco, CA 94105",
        trust_prefixes=("PGEUR",),
    ),
    ServicerRecord(
        "southern",
        "Southern Company",
        DebtType.UTILITY,
        "30 Ivan Allen Jr Blvd NW, Atlanta, GA 30308",
        trust_prefixes=("SOUTL",),
    ),
    ServicerRecord(
        "nrg",
        "NRG Energy",
        DebtType.UTILITY,
        "804 Carnegie Center, Princeton, NJ 08540",
        trust_prefixes=("NRGUT",),
    ),
    # Credit card
    ServicerRecord(
        "synchrony",
        "Synchrony Financial",
        DebtType.CREDIT_CARD,
        "777 Long Ridge Rd, Stamford, CT 06902",
        trust_prefixes=("SYNCC", "GECCN"),
    ),
    ServicerRecord(
        "discover",
        "Discover Financial Services",
        DebtType.CREDIT_CARD,
        "2500 Lake Cook Rd, Riverwoods, IL 60015",
        trust_prefixes=("DCENT", "DCMT"),
    ),
    ServicerRecord(
        "citi",
        "Citibank",
        DebtType.CREDIT_CARD,
        "388 Greenwich St, New York, NY 10013",
        trust_prefixes=("CITCC", "CBMT"),
    ),
    ServicerRecord(
        "chase",
        "Chase Bank",
        DebtType.CREDIT_CARD,
        "270 Park Ave, New York, NY 10017",
        trust_prefixes=("CHAIT", "JPMCC"),
    ),
    ServicerRecord(
        "amex",
        "American Express",
        DebtType.CREDIT_CARD,
        "200 Vesey St, New York, NY 10285",
        trust_prefixes=("AMXCA", "AMXMT"),
    ),
    ServicerRecord(
        "capitalone",
        "Capital One",
        DebtType.CREDIT_CARD,
        "1680 Capital One Dr, McLean, VA 22102",
        trust_prefixes=("COMET", "COMT"),
    ),
    # Student loan
    ServicerRecord(
        "navient",
        "Navient (formerly Sallie Mae)",
        DebtType.STUDENT_LOAN,
        "123 Justison St, Wilmington, DE 19801",
        trust_prefixes=("SLABS", "NAVSL", "NCSLT"),
    ),
    ServicerRecord(
        "nelnet",
        "Nelnet",
        DebtType.STUDENT_LOAN,
        "121 S 13th St, Lincoln, NE 68508",
        trust_prefixes=("NELLT", "NLSLT"),
    ),
    ServicerRecord(
        "sofi",
        "SoFi",
        DebtType.STUDENT_LOAN,
        "234 1st St, San Francisco, CA 94105",
        trust_prefixes=("SOFSL", "SFIST"),
    ),
    ServicerRecord(
        "commonbond",
        "CommonBond",
        DebtType.STUDENT_LOAN,
        "370 Lexington Ave, New York, NY 10017",
        trust_prefixes=("CBSLT", "CBOND"),
    ),
    ServicerRecord(
        "earnest",
        "Earnest",
        DebtType.STUDENT_LOAN,
        "535 Mission St, San Francisco, CA 94105",
        trust_prefixes=("ERNST", "ESLMT"),
    ),
    ServicerRecord(
        "great_lakes",
        "Great Lakes",
        DebtType.STUDENT_LOAN,
        "2401 International Ln, Madison, WI 53704",
        trust_prefixes=("GLSLT", "GLABS"),
    ),
    # Personal loan
    ServicerRecord(
        "lending_club",
        "LendingClub",
        DebtType.PERSONAL_LOAN,
        "595 Market St, San Francisco, CA 94105",
        trust_prefixes=("LCLUB", "LCIT"),
    ),
    ServicerRecord(
        "prosper",
        "Prosper Marketplace",
        DebtType.PERSONAL_LOAN,
        "221 Main St, San Francisco, CA 94105",
        trust_prefixes=("PROSP", "PMIT"),
    ),
    ServicerRecord(
        "sofi_personal",
        "SoFi Personal Loans",
        DebtType.PERSONAL_LOAN,
        "234 1st St, San Francisco, CA 94105",
        trust_prefixes=("SOFPL", "SFPLT"),
    ),
    ServicerRecord(
        "upstart",
        "Upstart",
        DebtType.PERSONAL_LOAN,
        "2950 S Delaware St, San Mateo, CA 94403",
        trust_prefixes=("UPST", "UPSLT"),
    ),
    ServicerRecord(
        "avant",
        "Avant",
        DebtType.PERSONAL_LOAN,
        "222 N LaSalle St, Chicago, IL 60601",
        trust_prefixes=("AVANT", "AVNT"),
    ),
    ServicerRecord(
        "marcus",
        "Marcus by Goldman Sachs",
        DebtType.PERSONAL_LOAN,
        "200 West St, New York, NY 10282",
        trust_prefixes=("GSPL", "MARCPL"),
    ),
    # Medical
    ServicerRecord(
        "portfolio_recovery",
        "Portfolio Recovery Associates",
        DebtType.MEDICAL,
        "120 Corporate Blvd, Norfolk, VA 23502",
        trust_prefixes=("PRAA", "PRAMS"),
    ),
    ServicerRecord(
        "encore",
        "Encore Capital Group",
        DebtType.MEDICAL,
        "3111 Camino Del Rio N, San Diego, CA 92108",
        trust_prefixes=("ECMG", "MDCBS"),
    ),
    ServicerRecord(
        "transworld",
        "Transworld Systems",
        DebtType.MEDICAL,
        "545 W 45th St, New York, NY 10036",
        trust_prefixes=("TSWMD", "TSMC"),
    ),
    ServicerRecord(
        "convergent",
        "Convergent Healthcare",
        DebtType.MEDICAL,
        "950 S Cherry St, Denver, CO 80246",
        trust_prefixes=("CVGHC", "CONVMED"),
    ),
    ServicerRecord(
        "r1rcm",
        "R1 RCM",
        DebtType.MEDICAL,
        "401 N Michigan Ave, Chicago, IL 60611",
        trust_prefixes=("R1RCM", "ACMDBT"),
    ),
    # Telecom
    ServicerRecord(
        "att_collections",
        "AT&T Collections",
        DebtType.TELECOM,
        "208 S Akard St, Dallas, TX 75202",
        trust_prefixes=("ATTRC", "ATTABS"),
    ),
    ServicerRecord(
        "verizon_collections",
        "Verizon Collections",
        DebtType.TELECOM,
        "1 Verizon Way, Basking Ridge, NJ 07920",
        trust_prefixes=("VZWRC", "VZABS"),
    ),
    ServicerRecord(
        "tmobile_collections",
        "T-Mobile Collections",
        DebtType.TELECOM,
        "12920 SE 38th St, Bellevue, WA 98006",
        trust_prefixes=("TMORC", "TMABS"),
    ),
    ServicerRecord(
        "sprint_collections",
        "Sprint Collections",
        DebtType.TELECOM,
        "6200 Sprint Pkwy, Overland Park, KS 66251",
        trust_prefixes=("SPTRC", "SPTABS"),
    ),
    ServicerRecord(
        "comcast_collections",
        "Comcast Collections",
        DebtType.TELECOM,
        "1701 JFK Blvd, Philadelphia, PA 19103",
        trust_prefixes=("CMCRC", "CMCABS"),
    ),
)

SERVICER_CATALOG: dict[DebtType, dict[str, ServicerRecord]] = {}
for _record in _SERVICERS:
    SERVICER_CATALOG.setdefault(_record.debt_type, {})[_record.servicer_id] = _record


def find_servicer(debt_type: DebtType, servicer: str | None) -> ServicerRecord | None:
    """
    Resolve a servicer by id or by name.

    Matches the catalog id first ("santander", "capital_one"), then a
    normalized name containment in either direction, so "Santander",
    "Santander Consumer USA" and "Santander Consumer USA Inc." all resolve
    to the same record.
    """
    if not servicer:
        return None
    records = SERVICER_CATALOG.get(debt_type, {})

    by_id = records.get(servicer.strip().lower().replace(" ", "_"))
    if by_id is not None:
        return by_id

    query = normalize_name(servicer)
    if not query:
        return None
    for record in records.values():
        name = normalize_name(record.name)
        if query in name or name in query:
            return record
    return None


def get_servicer_trust_prefixes(debt_type: DebtType, servicer: str | None) -> tuple[str, ...]:
    """Trust shelves serviced by ``servicer`` (empty when unknown)."""
    record = find_servicer(debt_type, servicer)
    return record.trust_prefixes if record else ()
