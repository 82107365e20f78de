from __future__ import annotations
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from .status_processor import status_processor
from ..utils.logger import get_logger

logger = get_logger(__name__)


def to_utc(dt_val) -> Optional[datetime]:
    """Epoch seconds/millis or ISO string -> aware UTC datetime."""
    if dt_val is None or dt_val == "":
        return None
    if isinstance(dt_val, bool):
        return None
    if isinstance(dt_val, (int, float)):
        if dt_val > 10**12:
            dt_val = dt_val / 1000.0
        try:
            return datetime.fromtimestamp(dt_val, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(dt_val, str):
        try:
            parsed = datetime.fromisoformat(dt_val.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    return None


def match_id(source_event_id: int) -> str:
    return str(uuid.uuid5(uuid.NAMESPACE_DNS, f"sofa_{source_event_id}"))


def event_date(event: Dict[str, Any]) -> Optional[date]:
    start = to_utc(event.get("startTimestamp") or event.get("startTimeUTC") or event.get("startTime"))
    return start.date() if start else None


class MatchProcessor:
    """Transforms raw scheduled events into flat match records."""

    def parse(self, event: Dict[str, Any], retrieved_at: Optional[str] = None) -> Optional[Dict[str, Any]]:
        try:
            ev_id = int(event.get("id"))
        except (TypeError, ValueError):
            return None

        home = event.get("homeTeam") if isinstance(event.get("homeTeam"), dict) else {}
        away = event.get("awayTeam") if isinstance(event.get("awayTeam"), dict) else {}
        tour = event.get("tournament") if isinstance(event.get("tournament"), dict) else {}
        ut = tour.get("uniqueTournament") if isinstance(tour.get("uniqueTournament"), dict) else {}
        category = tour.get("category") if isinstance(tour.get("category"), dict) else {}
        season = event.get("season") if isinstance(event.get("season"), dict) else {}
        round_info = event.get("roundInfo") if isinstance(event.get("roundInfo"), dict) else {}

        start = to_utc(event.get("startTimestamp") or event.get("startTimeUTC") or event.get("startTime"))
        stat = status_processor.parse(event)

        venue = event.get("venue")
        venue_name = None
        if isinstance(venue, dict):
            venue_name = venue.get("name") or (venue.get("stadium") or {}).get("name")

        return {
            "id": match_id(ev_id),
            "source": "sofascore",
            "source_event_id": ev_id,
            "home_team": home.get("name") or home.get("shortName"),
            "away_team": away.get("name") or away.get("shortName"),
            "home_team_sofa_id": home.get("id"),
            "away_team_sofa_id": away.get("id"),
            "home_score": stat["home_score"],
            "away_score": stat["away_score"],
            "home_score_ht": stat["home_score_ht"],
            "away_score_ht": stat["away_score_ht"],
            "status": stat["status"],
            "status_type": stat["status_type"],
            "start_time": start.isoformat() if start else None,
            "match_date": start.date().isoformat() if start else None,
            "competition": ut.get("name") or tour.get("name"),
            "competition_sofa_id": ut.get("id") or tour.get("id"),
            "country": category.get("name"),
            "season": season.get("year") or season.get("name"),
            "round": round_info.get("round"),
            "venue": venue_name,
            "retrieved_at": retrieved_at or datetime.now(timezone.utc).isoformat(),
        }

    def process(self, events: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        retrieved_at = datetime.now(timezone.utc).isoformat()
        out: List[Dict[str, Any]] = []
        skipped = 0
        for ev in events:
            row = self.parse(ev, retrieved_at) if isinstance(ev, dict) else None
            if row is None:
                skipped += 1
                continue
            out.append(row)
        if skipped:
            logger.warning(f"[match_processor] skipped {skipped} events without a usable id")
        return out


match_processor = MatchProcessor()
