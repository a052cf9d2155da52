"""Lenient parsing of the static JSON tables into model objects.

The source tables are exported from spreadsheets and are not always
tidy: missing keys, ``NaN`` placeholders, and numbers encoded as strings
all occur. Malformed records degrade to empty values instead of failing
the whole load.
"""

from __future__ import annotations

__all__ = [
    "load_json",
    "parse_isnads",
    "parse_place_mentions",
    "parse_profiles",
    "parse_route_segments",
]

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path

from isnad_graph.parser.model import Isnad, NodeId, Person, normalize_id

logger = logging.getLogger(__name__)

_MISSING_MARKERS = {"", "nan", "none", "null", "?"}


@dataclass(frozen=True)
class RouteSegment:
    """One route-segment feature between two toponyms."""

    start: str
    end: str
    meters: float | None = None
    coordinates: tuple[tuple[float, float], ...] = ()


@dataclass(frozen=True)
class PlaceMention:
    """A single mention of a place in a biography."""

    bio_id: NodeId
    canonical_name: str
    english_transliteration: str = ""
    coords: str = ""
    certain: str = ""
    uri: str = ""
    context: str = "unknown"
    source: str = ""


def load_json(path: Path | str):
    """Read a JSON file, accepting bare ``NaN`` tokens."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: not valid JSON ({e.msg} at line {e.lineno})") from e


def _clean(value):
    """Return None for empty and NaN-like placeholders."""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, str) and value.strip().lower() in _MISSING_MARKERS:
        return None
    return value


def _clean_id(value) -> NodeId | None:
    value = _clean(value)
    if value is None:
        return None
    return normalize_id(value)


def _as_list(value) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _records(data, key: str) -> list:
    """Extract a list of records from either a bare list or ``{key: [...]}``."""
    if data is None:
        return []
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return _as_list(data.get(key))
    raise ValueError(
        f"Expected a JSON list or an object with a '{key}' list, "
        f"got {type(data).__name__}"
    )


def parse_profiles(data) -> dict[NodeId, Person]:
    """Parse the person-profile table.

    Accepts either a mapping ``{person_id: {...}}`` or a list of records
    carrying a ``person_id`` field.
    """
    if data is None:
        return {}
    if isinstance(data, dict) and "profiles" not in data:
        items = list(data.items())
    else:
        items = [(rec.get("person_id"), rec) for rec in _records(data, "profiles")
                 if isinstance(rec, dict)]

    profiles: dict[NodeId, Person] = {}
    for raw_id, rec in items:
        pid = _clean_id(raw_id)
        if pid is None or not isinstance(rec, dict):
            logger.debug("Skipping profile with unusable id %r", raw_id)
            continue
        activity = rec.get("transmission_activity")
        profiles[pid] = Person(
            person_id=pid,
            name=_clean(rec.get("name")) or "",
            has_id=_clean_id(rec.get("has_id")),
            transmission_activity=activity if isinstance(activity, dict) else {},
        )
    logger.debug("Parsed %d profiles", len(profiles))
    return profiles


def _parse_chain_entries(entries: list) -> tuple[list, list, list]:
    """Split a per-person chain (``[{person_id, name, has_id}, ...]``)."""
    seq, names, has_ids = [], [], []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        pid = _clean_id(entry.get("person_id"))
        if pid is None:
            continue
        seq.append(pid)
        names.append(_clean(entry.get("canonical_name")) or _clean(entry.get("name")))
        has_ids.append(_clean_id(entry.get("has_id")))
    return seq, names, has_ids


def _parse_isnad(rec: dict, index: int) -> Isnad:
    if "sequence" in rec:
        raw_seq = _as_list(rec.get("sequence"))
        raw_names = _as_list(rec.get("names"))
        raw_has = _as_list(rec.get("has_ids"))
        seq, names, has_ids = [], [], []
        for i, raw in enumerate(raw_seq):
            pid = _clean_id(raw)
            if pid is None:
                continue
            seq.append(pid)
            names.append(_clean(raw_names[i]) if i < len(raw_names) else None)
            has_ids.append(_clean_id(raw_has[i]) if i < len(raw_has) else None)
    else:
        seq, names, has_ids = _parse_chain_entries(_as_list(rec.get("chain")))

    sources = {str(s) for s in _as_list(rec.get("sources")) if _clean(s) is not None}
    if not sources and _clean(rec.get("source")) is not None:
        sources = {str(rec["source"])}
    bio_ids = {_clean_id(b) for b in _as_list(rec.get("unique_bio_ids"))}
    bio_ids.discard(None)

    isnad_id = _clean(rec.get("isnad_id"))
    return Isnad(
        sequence=tuple(seq),
        names=tuple(names),
        has_ids=tuple(has_ids),
        isnad_id=str(isnad_id) if isnad_id is not None else f"isnad_{index}",
        sources=frozenset(sources),
        unique_bio_ids=frozenset(bio_ids),
    )


def parse_isnads(data) -> list[Isnad]:
    """Parse the isnad/chain table.

    Records use either parallel ``sequence``/``names``/``has_ids`` arrays
    or a ``chain`` list of per-person objects. Records without either
    become empty chains.
    """
    isnads = []
    for i, rec in enumerate(_records(data, "isnads")):
        if not isinstance(rec, dict):
            logger.debug("Skipping non-object isnad record at index %d", i)
            continue
        isnads.append(_parse_isnad(rec, i))
    logger.debug("Parsed %d isnads", len(isnads))
    return isnads


def _parse_meters(value) -> float | None:
    value = _clean(value)
    if value is None:
        return None
    try:
        meters = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(meters) or meters < 0:
        return None
    return meters


def _parse_line_coords(geometry) -> tuple[tuple[float, float], ...]:
    if not isinstance(geometry, dict):
        return ()
    coords = geometry.get("coordinates")
    if geometry.get("type") == "MultiLineString":
        coords = [pt for line in _as_list(coords) for pt in _as_list(line)]
    points = []
    for pt in _as_list(coords):
        if isinstance(pt, (list, tuple)) and len(pt) >= 2:
            try:
                points.append((float(pt[0]), float(pt[1])))
            except (TypeError, ValueError):
                continue
    return tuple(points)


def parse_route_segments(data) -> list[RouteSegment]:
    """Parse a GeoJSON FeatureCollection of route segments."""
    segments = []
    for feature in _records(data, "features"):
        if not isinstance(feature, dict):
            continue
        props = feature.get("properties") or {}
        start = _clean(props.get("sToponym"))
        end = _clean(props.get("eToponym"))
        if start is None or end is None:
            logger.debug("Skipping route feature without endpoints: %r", props)
            continue
        segments.append(RouteSegment(
            start=str(start),
            end=str(end),
            meters=_parse_meters(props.get("Meter")),
            coordinates=_parse_line_coords(feature.get("geometry")),
        ))
    logger.debug("Parsed %d route segments", len(segments))
    return segments


def parse_place_mentions(data) -> list[PlaceMention]:
    """Parse geographic-mention rows, dropping rows without a place name."""
    mentions = []
    for row in _records(data, "mentions"):
        if not isinstance(row, dict):
            continue
        name = _clean(row.get("canonical_name"))
        bio_id = _clean_id(row.get("bio_id"))
        if name is None or bio_id is None:
            continue
        name = str(name).strip()
        mentions.append(PlaceMention(
            bio_id=bio_id,
            canonical_name=name,
            english_transliteration=str(_clean(row.get("english_transliteration")) or name),
            coords=str(row.get("coords") or "").strip(),
            certain=str(_clean(row.get("certain")) or ""),
            uri=str(_clean(row.get("URI")) or ""),
            context=str(_clean(row.get("context")) or "unknown"),
            source=str(_clean(row.get("source")) or ""),
        ))
    return mentions
