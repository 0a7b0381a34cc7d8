"""
Attribute defaulting policy.

Missing or unparsable attributes never fail a parse. Each attribute the
parser reads has an entry in ATTRIBUTE_DEFAULTS naming its type and the
value used when the document does not provide a usable one:

    Track.name   str    ""
    Clip.name    str    "unnamed"   (empty string counts as missing)
    Clip.time    float  0.0         (non-numeric and non-finite count as missing)
    Tempo.value  float  None
"""

import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..constants import ParserDefaults, ProjectSchema


@dataclass(frozen=True)
class AttributeDefault:
    """Type and fallback value for one element attribute."""
    kind: type
    default: Any


ATTRIBUTE_DEFAULTS: Dict[Tuple[str, str], AttributeDefault] = {
    ("Track", ProjectSchema.NAME): AttributeDefault(str, ParserDefaults.TRACK_NAME),
    ("Clip", ProjectSchema.NAME): AttributeDefault(str, ParserDefaults.CLIP_NAME),
    ("Clip", ProjectSchema.TIME): AttributeDefault(float, ParserDefaults.CLIP_TIME),
    ("Tempo", ProjectSchema.VALUE): AttributeDefault(float, ParserDefaults.TEMPO),
}


def parse_float(raw: Optional[str]) -> Optional[float]:
    """Parse a finite float, returning None for anything else."""
    if raw is None:
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_or_default(element: ET.Element, attribute: str) -> Any:
    """
    Read an attribute and coerce it, falling back to its documented default.

    Args:
        element: Element carrying the attribute
        attribute: Attribute name

    Returns:
        The parsed value, or the default from ATTRIBUTE_DEFAULTS

    Raises:
        KeyError: The (tag, attribute) pair has no default policy
    """
    key = (element.tag, attribute)
    if key not in ATTRIBUTE_DEFAULTS:
        raise KeyError(f"No default policy for {element.tag}@{attribute}")

    policy = ATTRIBUTE_DEFAULTS[key]
    raw = element.get(attribute)

    if policy.kind is float:
        value = parse_float(raw)
        return policy.default if value is None else value

    if not raw:
        return policy.default
    return raw
