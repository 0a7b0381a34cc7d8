"""
XML document loading and structural queries.

Structural paths use CSS child combinators ("Lanes > Clips > Clip"): an
element matches when its own tag is the last name and its chain of direct
parents carries the preceding names.
"""

import xml.etree.ElementTree as ET
from typing import Dict, List, Union

from ..errors import MalformedDocumentError

Scope = Union[ET.ElementTree, ET.Element]


def parse_document(text: str) -> ET.ElementTree:
    """Parse project XML text into an ElementTree."""
    try:
        return ET.ElementTree(ET.fromstring(text))
    except ET.ParseError as e:
        raise MalformedDocumentError(f"project.xml is not well-formed: {e}") from e


def split_path(structural_path: str) -> List[str]:
    """Split "A > B > C" into ["A", "B", "C"]."""
    parts = [part.strip() for part in structural_path.split(">")]
    if not parts or any(not part for part in parts):
        raise ValueError(f"Invalid structural path: {structural_path!r}")
    return parts


def select(scope: Scope, structural_path: str) -> List[ET.Element]:
    """
    Select elements matching a structural path, in document order.

    Args:
        scope: A whole document (root element included in the search) or an
               element (only its descendants are candidates)
        structural_path: Child-combinator path, e.g. "Structure > Track"

    Returns:
        Matching elements in document order
    """
    if isinstance(scope, ET.ElementTree):
        root = scope.getroot()
        include_root = True
    else:
        root = scope
        include_root = False

    chain = split_path(structural_path)
    target = chain[-1]
    ancestors = list(reversed(chain[:-1]))
    parents = _parent_map(root) if ancestors else {}

    matches = []
    for elem in root.iter(target):
        if elem is root and not include_root:
            continue
        if _has_ancestors(elem, ancestors, parents):
            matches.append(elem)
    return matches


def select_first(scope: Scope, structural_path: str):
    """Return the first element matching a structural path, or None."""
    found = select(scope, structural_path)
    return found[0] if found else None


def _parent_map(root: ET.Element) -> Dict[ET.Element, ET.Element]:
    return {child: parent for parent in root.iter() for child in parent}


def _has_ancestors(elem: ET.Element, ancestors: List[str], parents: Dict[ET.Element, ET.Element]) -> bool:
    current = elem
    for tag in ancestors:
        current = parents.get(current)
        if current is None or current.tag != tag:
            return False
    return True
