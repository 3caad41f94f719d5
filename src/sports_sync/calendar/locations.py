"""Venue lookup for calendar entry locations."""

from __future__ import annotations

PIZZITOLA = "Pizzitola Sports Center, Providence, RI 02906"
MEEHAN = "Meehan Auditorium, 225 Hope St, Providence, RI 02912"

SPORT_LOCATIONS: dict[str, str] = {
    "Men's Tennis": "",
    "Women's Tennis": "",
    "Men's Water Polo": "",
    "Women's Water Polo": "",
    "Men's Basketball": PIZZITOLA,
    "Women's Basketball": PIZZITOLA,
    "Wrestling": "",
    "Gymnastics": "",
    "Gymnastics (Rumble & Tumble)": "",
    "Wrestling (Rumble & Tumble)": "",
    "Men's Ice Hockey": MEEHAN,
    "Women's Ice Hockey": MEEHAN,
    "Track and Field (OMAC)": "Olney-Margolies Athletic Center (OMAC)",
    "Men's Lacrosse": "",
    "Women's Lacrosse": "",
    "Baseball": "Terrence Murray Baseball Stadium",
    "Softball": "",
    "Men's Crew": "",
}


def get_sport_location(sport: str, overrides: dict[str, str] | None = None) -> str:
    """Get the venue for a sport, or an empty string if unknown."""
    if overrides and sport in overrides:
        return overrides[sport]
    return SPORT_LOCATIONS.get(sport, "")
