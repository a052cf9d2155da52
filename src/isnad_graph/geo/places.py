"""Aggregate place mentions into deduplicated locations."""

from __future__ import annotations

__all__ = [
    "Location",
    "aggregate_locations",
    "normalize_place_name",
    "parse_coords",
    "relevant_uris",
]

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from isnad_graph.parser.model import NodeId
from isnad_graph.parser.records import PlaceMention

REGION_FLAG = "r"

# Leading definite article: Arabic "ال" or a transliterated "al-"/"el-"/"al ".
_ARTICLE_RE = re.compile(r"^(?:ال|[ae]l[-\s’']+)", re.IGNORECASE)


def normalize_place_name(name: str) -> str:
    """Dedup key for a place name: article stripped, whitespace collapsed, case-folded."""
    text = " ".join(str(name).split())
    text = _ARTICLE_RE.sub("", text, count=1)
    return text.casefold()


def parse_coords(raw) -> tuple[float, float] | None:
    """Parse a ``"lat,lng"`` string; unknown or invalid values give None."""
    if raw is None:
        return None
    parts = str(raw).split(",")
    if len(parts) != 2:
        return None
    try:
        lat, lng = float(parts[0]), float(parts[1])
    except ValueError:
        return None
    if math.isnan(lat) or math.isnan(lng):
        return None
    return (lat, lng)


@dataclass
class Location:
    """A deduplicated place with the biographies that mention it."""

    canonical_name: str
    english_transliteration: str
    coords: tuple[float, float] | None = None
    uri: str = ""
    is_region: bool = False
    # bio_id -> context -> sources
    mentions: dict[NodeId, dict[str, set[str]]] = field(default_factory=dict)

    @property
    def mappable(self) -> bool:
        return self.coords is not None

    @property
    def bio_ids(self) -> list[NodeId]:
        return list(self.mentions)

    def add_mention(self, mention: PlaceMention) -> None:
        contexts = self.mentions.setdefault(mention.bio_id, {})
        sources = contexts.setdefault(mention.context, set())
        if mention.source:
            sources.add(mention.source)

    def context_groups(self, bio_id: NodeId) -> list[tuple[str, list[str]]]:
        """``[(context, sorted sources), ...]`` for one biography, sorted by context."""
        contexts = self.mentions.get(bio_id, {})
        return [(ctx, sorted(srcs)) for ctx, srcs in sorted(contexts.items())]

    @property
    def all_sources(self) -> list[str]:
        result: set[str] = set()
        for contexts in self.mentions.values():
            for srcs in contexts.values():
                result.update(srcs)
        return sorted(result)


def aggregate_locations(
    mentions: Iterable[PlaceMention],
    bio_id: NodeId | None = None,
) -> list[Location]:
    """Merge mentions of the same place, optionally for one biography only.

    The first mention of a place fixes its display fields. Coordinates,
    URI, and the region flag are filled from later mentions when the
    first one lacks them.
    """
    by_key: dict[str, Location] = {}
    for mention in mentions:
        if bio_id is not None and mention.bio_id != bio_id:
            continue
        key = normalize_place_name(mention.canonical_name)
        if not key:
            continue
        loc = by_key.get(key)
        if loc is None:
            loc = Location(
                canonical_name=mention.canonical_name,
                english_transliteration=mention.english_transliteration,
            )
            by_key[key] = loc
        if loc.coords is None:
            loc.coords = parse_coords(mention.coords)
        if not loc.uri and mention.uri:
            loc.uri = mention.uri
        if mention.certain == REGION_FLAG:
            loc.is_region = True
        loc.add_mention(mention)
    return list(by_key.values())


def relevant_uris(locations: Iterable[Location]) -> list[str]:
    """URIs of mappable locations, in first-seen order."""
    return list(dict.fromkeys(loc.uri for loc in locations if loc.mappable and loc.uri))
