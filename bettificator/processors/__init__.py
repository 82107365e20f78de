# bettificator/processors/__init__.py
"""
Lagani procesori: raw SofaScore payloads -> flat records ready for insert.
"""

from .status_processor import StatusProcessor, status_processor, normalize_status, clamp_to_db
from .match_processor import MatchProcessor, match_processor, event_date, to_utc
from .club_processor import ClubProcessor, club_processor, catalog_key_for, NON_ALPHA_KEY

__all__ = [
    "StatusProcessor", "status_processor", "normalize_status", "clamp_to_db",
    "MatchProcessor", "match_processor", "event_date", "to_utc",
    "ClubProcessor", "club_processor", "catalog_key_for", "NON_ALPHA_KEY",
]
