import re
from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Output directory for batch reports
REPORTS_DIR = PROJECT_ROOT / "data" / "reports"

# Amount token: at least one digit, optional comma/period separators, M/K suffix
AMOUNT = r"(?=[\d,.]*\d)[\d,.]+[MK]"

# Any amount-shaped token; a malformed amount still closes its transfer block
BLOCK_AMOUNT = r"[\d,.]+[MK]"

# Transfer details line: "<POS> [<round>] <base> <final> ...", e.g. "ST 12 10,5M 15M"
DETAILS_PATTERN = re.compile(
    rf"^([A-Z]{{1,4}})\s+(?:(\d+)\s+)?({BLOCK_AMOUNT})\s+({BLOCK_AMOUNT}).*$",
    re.IGNORECASE,
)

# League template line tails: "<name part> <round> <value> <income>"
TEMPLATE_DUPE_PATTERN = re.compile(rf"^(.+?)\s+\1\s+\d+\s+({AMOUNT})\s+({AMOUNT})$")
TEMPLATE_LINE_PATTERN = re.compile(rf"^(.+?)\s+\d+\s+({AMOUNT})\s+({AMOUNT})$")

# Squad page: stats line "<POS> ... <ATT> <DEF> <OVR>" and a trailing value
SQUAD_STATS_PATTERN = re.compile(r"^([A-Z]{2,3})\s+.*?\s+(\d{1,3})\s+(\d{1,3})\s+(\d{1,3})\s*$")
SQUAD_VALUE_PATTERN = re.compile(rf"({AMOUNT})\s*$")
SQUAD_NUMBER_PATTERN = re.compile(r"^\d{1,2}$")

# Section headers on the squad page -> position group
SQUAD_SECTION_HEADERS = {
    "forwards": "Forward",
    "midfielders": "Midfielder",
    "defenders": "Defender",
    "goalkeepers": "Goalkeeper",
}
DEFAULT_POSITION_GROUP = "Midfielder"
