import pytest

from dawplay.errors import MissingRootError
from dawplay.model import Clip, FileReference, ProjectModel, Track
from dawplay.parser import build_project_model, parse_document


def test_build_sample_project(sample_project_xml):
    model = build_project_model(parse_document(sample_project_xml))

    assert model == ProjectModel(tracks=(
        Track(name="Drums", clips=(
            Clip(name="Loop A", start_beat=0.0, audio_reference=FileReference("audio/drums.wav")),
            Clip(name="Loop B", start_beat=4.0, audio_reference=FileReference("audio/fill.wav")),
        )),
        Track(name="Keys", clips=(
            Clip(name="Chords", start_beat=8.0, audio_reference=None),
        )),
    ))


def test_clip_count_matches_document(sample_project_xml):
    document = parse_document(sample_project_xml)
    model = build_project_model(document)
    assert len(model.clips) == len(list(document.getroot().iter("Clip")))
    assert [c.name for c in model.clips] == ["Loop A", "Loop B", "Chords"]


def test_defaults_applied():
    document = parse_document(
        "<Project><Structure><Track><Lanes><Clips>"
        "<Clip/><Clip time='soon'/><Clip name='' time='2'/>"
        "</Clips></Lanes></Track></Structure></Project>"
    )
    model = build_project_model(document)

    track = model.tracks[0]
    assert track.name == ""
    assert [(c.name, c.start_beat) for c in track.clips] == [
        ("unnamed", 0.0),
        ("unnamed", 0.0),
        ("unnamed", 2.0),
    ]


def test_empty_container_gives_empty_model():
    model = build_project_model(parse_document("<Project><Structure/></Project>"))
    assert model == ProjectModel()
    assert model.track_count == 0


def test_missing_container_fails():
    with pytest.raises(MissingRootError):
        build_project_model(parse_document("<Project><Arrangement/></Project>"))


def test_clips_follow_document_order_not_time():
    document = parse_document(
        "<Project><Structure><Track name='t'><Lanes><Clips>"
        "<Clip name='late' time='16'/><Clip name='early' time='1'/>"
        "</Clips></Lanes></Track></Structure></Project>"
    )
    model = build_project_model(document)
    assert [c.name for c in model.clips] == ["late", "early"]
