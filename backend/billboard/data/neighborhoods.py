"""
Baltimore neighborhoods by postal code, used to flavor the greeting prompt.
Add or edit entries; lookup is an exact match on the 5-digit zip from reverse geocoding.
"""
from typing import TypedDict


class NeighborhoodEntry(TypedDict):
    zip_code: str
    neighborhoods: list[str]
    highlights: list[str]


BALTIMORE_NEIGHBORHOODS: list[NeighborhoodEntry] = [
    {"zip_code": "21201", "neighborhoods": ["Downtown", "Mount Vernon", "Seton Hill"],
     "highlights": ["historic", "cultural landmarks", "arts", "education", "diverse community"]},
    {"zip_code": "21202", "neighborhoods": ["Inner Harbor", "Little Italy", "Jonestown"],
     "highlights": ["waterfront", "tourism", "dining", "nightlife", "Italian-American community"]},
    {"zip_code": "21205", "neighborhoods": ["Middle East", "Milton-Montford", "Madison-Eastend"],
     "highlights": ["Johns Hopkins", "medical", "revitalization", "development", "African-American community"]},
    {"zip_code": "21206", "neighborhoods": ["Frankford", "Waltherson", "Cedonia"],
     "highlights": ["residential", "parks", "community", "diverse housing", "African-American community"]},
    {"zip_code": "21209", "neighborhoods": ["Mount Washington", "Cheswolde", "Cross Keys"],
     "highlights": ["suburban", "shopping", "recreation", "Jones Falls Trail", "Jewish community"]},
    {"zip_code": "21210", "neighborhoods": ["Roland Park", "Wyndhurst", "Tuscany-Canterbury"],
     "highlights": ["historic homes", "tree-lined", "Johns Hopkins", "university proximity", "affluent community"]},
    {"zip_code": "21211", "neighborhoods": ["Hampden", "Medfield", "Remington"],
     "highlights": ["arts", "shops", "festivals", "HonFest", "creative community"]},
    {"zip_code": "21212", "neighborhoods": ["Homeland", "Govans", "Mid-Govans"],
     "highlights": ["historic homes", "education", "shopping", "residential mix", "diverse community"]},
    {"zip_code": "21213", "neighborhoods": ["Belair-Edison", "Clifton Park", "Broadway East"],
     "highlights": ["parks", "residential", "African-American community", "revitalization"]},
    {"zip_code": "21214", "neighborhoods": ["Hamilton", "Lauraville"],
     "highlights": ["arts", "residential", "gardening", "family-friendly", "diverse community"]},
    {"zip_code": "21215", "neighborhoods": ["Park Heights", "Pimlico", "Arlington"],
     "highlights": ["Pimlico Race Course", "African-American community", "revitalization", "residential"]},
    {"zip_code": "21216", "neighborhoods": ["Walbrook", "Forest Park", "Hanlon-Longwood"],
     "highlights": ["historic", "residential", "African-American community", "parks"]},
    {"zip_code": "21217", "neighborhoods": ["Druid Hill Park", "Reservoir Hill", "Bolton Hill"],
     "highlights": ["parks", "historic homes", "arts", "diverse community"]},
    {"zip_code": "21218", "neighborhoods": ["Waverly", "Charles Village", "Barclay"],
     "highlights": ["Johns Hopkins University", "education", "arts", "diverse community"]},
    {"zip_code": "21223", "neighborhoods": ["Poppleton", "Union Square", "Hollins Market"],
     "highlights": ["historic", "African-American community", "revitalization", "residential"]},
    {"zip_code": "21224", "neighborhoods": ["Highlandtown", "Canton", "Brewers Hill"],
     "highlights": ["arts", "dining", "Polish-American community", "revitalization"]},
    {"zip_code": "21225", "neighborhoods": ["Brooklyn", "Cherry Hill", "Curtis Bay"],
     "highlights": ["industrial", "African-American community", "residential", "revitalization"]},
    {"zip_code": "21226", "neighborhoods": ["Curtis Bay", "Hawkins Point"],
     "highlights": ["industrial", "port", "residential", "revitalization"]},
    {"zip_code": "21229", "neighborhoods": ["Irvington", "Beechfield", "Saint Josephs"],
     "highlights": ["residential", "parks", "diverse community", "revitalization"]},
    {"zip_code": "21230", "neighborhoods": ["Federal Hill", "Locust Point", "Riverside"],
     "highlights": ["waterfront", "historic", "young professionals", "dining", "Irish-American community"]},
    {"zip_code": "21231", "neighborhoods": ["Fells Point", "Upper Fells Point", "Butchers Hill"],
     "highlights": ["historic", "waterfront", "dining", "arts", "diverse community"]},
    {"zip_code": "21239", "neighborhoods": ["Loch Raven", "Northwood", "Perring Loch"],
     "highlights": ["residential", "education", "parks", "African-American community"]},
    {"zip_code": "21251", "neighborhoods": ["Morgan State University"],
     "highlights": ["education", "African-American community", "university"]},
    {"zip_code": "21287", "neighborhoods": ["Johns Hopkins Hospital"],
     "highlights": ["medical", "education", "research", "diverse community"]},
]

_BY_ZIP: dict[str, NeighborhoodEntry] = {e["zip_code"]: e for e in BALTIMORE_NEIGHBORHOODS}


def get_neighborhood_entry(zip_code: str | None) -> NeighborhoodEntry | None:
    """Exact zip match. None when zip is missing or not in the table."""
    if not zip_code:
        return None
    return _BY_ZIP.get(zip_code.strip())
