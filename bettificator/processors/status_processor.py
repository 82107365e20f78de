# bettificator/processors/status_processor.py
from __future__ import annotations
from typing import Any, Dict, Optional
from ..core.config import STATUS_MAPPING

# Map raw SofaScore status strings to the limited set stored with each match:
#   'live', 'upcoming', 'finished', 'ht', 'ft',
#   'postponed', 'canceled', 'abandoned', 'suspended'.
# Incoming values are lower-cased with spaces/underscores removed before
# lookup; anything unrecognised becomes 'upcoming'.
_STATUS_MAP = {k.replace("_", ""): v for k, v in STATUS_MAPPING.items()}


def normalize_status(raw: Optional[str]) -> str:
    if not raw:
        return "upcoming"
    key = str(raw).lower().replace(" ", "").replace("_", "")
    return _STATUS_MAP.get(key, "upcoming")


def clamp_to_db(val: Optional[int], lo: int = 0, hi: int = 999) -> Optional[int]:
    if val is None:
        return None
    try:
        v = int(val)
    except (TypeError, ValueError):
        return None
    return max(lo, min(hi, v))


class StatusProcessor:
    """Status and score normalisation for one raw event."""

    def parse(self, event: Dict[str, Any]) -> Dict[str, Any]:
        s = event.get("status") or {}
        if not isinstance(s, dict):
            s = {"type": s}
        # The machine readable 'type' wins over descriptions like "1st half" or "AET".
        raw_type = s.get("type") or event.get("statusType")
        raw_desc = s.get("description")
        status = normalize_status(raw_type or raw_desc)
        if raw_desc and str(raw_desc).lower().replace(' ', '') in {'halftime', 'ht'}:
            status = 'ht'

        def _score(side: str, key: str) -> Optional[int]:
            obj = event.get(f"{side}Score") or {}
            if isinstance(obj, dict):
                return obj.get(key)
            return None

        return {
            "status": status,
            "status_type": raw_type or raw_desc,
            "home_score": clamp_to_db(_score("home", "current")),
            "away_score": clamp_to_db(_score("away", "current")),
            "home_score_ht": clamp_to_db(_score("home", "period1")),
            "away_score_ht": clamp_to_db(_score("away", "period1")),
        }


status_processor = StatusProcessor()
