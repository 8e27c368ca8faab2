# src/museum_insights/config.py
import os

# raw dataset header (lowercased) -> record field
COLUMN_MAP = {
    "museum id": "museum_id",
    "legal name": "legal_name",
    "museum type": "museum_type",
    "city (administrative location)": "city",
    "state (administrative location)": "state",
    "zip code (administrative location)": "zip_code",
    "income": "income",
    "revenue": "revenue",
}

RECORD_FIELDS = ["museum_id", "legal_name", "museum_type", "city", "state", "zip_code", "income", "revenue"]
TEXT_FIELDS = ["museum_id", "legal_name", "museum_type", "city", "state", "zip_code"]
MONEY_FIELDS = ["income", "revenue"]

GROUP_KEYS = {"type": "museum_type", "city": "city", "state": "state"}

MEASURES = ("museum_count", "average_income", "total_income", "average_revenue", "total_revenue")

FIGURE_DPI = 150

DEFAULT_MODEL = os.getenv("MUSEUM_INSIGHTS_MODEL", "gpt-4o-mini")
LOG_DIR = os.getenv("MUSEUM_INSIGHTS_LOG_DIR")  # None -> console only
