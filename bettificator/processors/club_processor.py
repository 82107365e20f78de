from __future__ import annotations
import unicodedata
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

NON_ALPHA_KEY = "1"


def club_id(sofascore_id: int) -> str:
    return str(uuid.uuid5(uuid.NAMESPACE_DNS, f"sofa_team_{sofascore_id}"))


def fold_name(name: str) -> str:
    """Strip accents and upper-case ('Étoile' -> 'ETOILE')."""
    decomposed = unicodedata.normalize("NFKD", name or "")
    return "".join(c for c in decomposed if not unicodedata.combining(c)).strip().upper()


def catalog_key_for(name: str) -> str:
    """Catalog page a club name belongs to: its first letter, or '1' for anything else."""
    folded = fold_name(name)
    first = folded[:1]
    if first and "A" <= first <= "Z":
        return first
    return NON_ALPHA_KEY


class ClubProcessor:
    """Vadi klubove iz search payloada u jednostavne insert objekte."""

    def parse(self, team: Dict[str, Any], retrieved_at: Optional[str] = None) -> Optional[Dict[str, Any]]:
        try:
            sid = int(team.get("id"))
        except (TypeError, ValueError):
            return None
        name = team.get("name") or team.get("shortName")
        if not (isinstance(name, str) and name.strip()):
            return None

        country = team.get("country") if isinstance(team.get("country"), dict) else {}
        colors = team.get("teamColors") if isinstance(team.get("teamColors"), dict) else {}

        return {
            "id": club_id(sid),
            "sofascore_id": sid,
            "name": name.strip(),
            "short_name": team.get("shortName") or name[:15],
            "slug": team.get("slug"),
            "country": country.get("name"),
            "gender": team.get("gender"),
            "national": bool(team.get("national", False)),
            "primary_color": colors.get("primary") or "#222222",
            "secondary_color": colors.get("secondary") or "#FFFFFF",
            "logo_url": f"https://img.sofascore.com/api/v1/team/{sid}/image",
            "catalog_key": catalog_key_for(name),
            "retrieved_at": retrieved_at or datetime.now(timezone.utc).isoformat(),
        }

    def process(self, teams: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        retrieved_at = datetime.now(timezone.utc).isoformat()
        out = []
        for t in teams:
            row = self.parse(t, retrieved_at) if isinstance(t, dict) else None
            if row is not None:
                out.append(row)
        return out


club_processor = ClubProcessor()
