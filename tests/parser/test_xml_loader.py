import pytest
import xml.etree.ElementTree as ET

from dawplay.errors import MalformedDocumentError, ParseError
from dawplay.parser.xml_loader import parse_document, select, select_first, split_path


def test_parse_document_returns_tree():
    tree = parse_document("<Project><Structure/></Project>")
    assert isinstance(tree, ET.ElementTree)
    assert tree.getroot().tag == "Project"


def test_parse_document_malformed():
    with pytest.raises(MalformedDocumentError) as exc_info:
        parse_document("<Project><Structure></Project>")
    assert isinstance(exc_info.value, ParseError)


def test_split_path():
    assert split_path("Lanes > Clips > Clip") == ["Lanes", "Clips", "Clip"]
    assert split_path("Clip") == ["Clip"]
    with pytest.raises(ValueError):
        split_path("Lanes > > Clip")


def test_select_requires_direct_parents():
    """
    Only elements whose direct parent chain matches are selected.
    """
    tree = parse_document(
        "<Project>"
        "<Structure><Track name='a'/><Group><Track name='nested'/></Group><Track name='b'/></Structure>"
        "</Project>"
    )
    names = [t.get("name") for t in select(tree, "Structure > Track")]
    assert names == ["a", "b"]


def test_select_document_order_across_containers():
    tree = parse_document(
        "<Project>"
        "<Structure><Track name='1'/></Structure>"
        "<Other><Structure><Track name='2'/></Structure></Other>"
        "</Project>"
    )
    assert [t.get("name") for t in select(tree, "Structure > Track")] == ["1", "2"]


def test_select_includes_document_root():
    tree = parse_document("<Structure><Track name='x'/></Structure>")
    assert len(select(tree, "Structure")) == 1


def test_select_on_element_excludes_scope_itself():
    root = ET.fromstring("<Clip><Clip name='inner'/></Clip>")
    found = select(root, "Clip")
    assert len(found) == 1
    assert found[0].get("name") == "inner"


def test_select_parent_may_be_scope():
    clip = ET.fromstring("<Clip><Audio><File path='a.wav'/></Audio></Clip>")
    assert select_first(clip, "Audio > File").get("path") == "a.wav"


def test_select_first_none():
    clip = ET.fromstring("<Clip><Notes/></Clip>")
    assert select_first(clip, "Audio > File") is None
