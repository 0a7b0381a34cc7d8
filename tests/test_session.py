import pytest

from dawplay.errors import LoadError, MalformedDocumentError, MissingRootError
from dawplay.session import Session, SessionManager, load_session


@pytest.fixture
def manager():
    return SessionManager()


def test_load_session_from_bytes(sample_archive_bytes):
    session = load_session(sample_archive_bytes)

    assert isinstance(session, Session)
    assert session.source is None
    assert session.model.track_count == 2
    assert session.document_tempo == 128.0
    assert session.archive.read("audio/drums.wav") is not None
    assert len(session.fingerprint) == 64


def test_load_session_from_file(tmp_path, sample_archive_bytes):
    path = tmp_path / "song.dawproject"
    path.write_bytes(sample_archive_bytes)

    session = load_session(path)

    assert session.source == path
    assert [c.name for c in session.model.clips] == ["Loop A", "Loop B", "Chords"]


def test_missing_project_xml(archive_bytes):
    with pytest.raises(LoadError, match="project.xml"):
        load_session(archive_bytes({"audio/a.wav": b"x"}))


def test_malformed_project_xml(archive_bytes):
    with pytest.raises(MalformedDocumentError):
        load_session(archive_bytes({"project.xml": "<Project>"}))


def test_not_a_project(archive_bytes):
    with pytest.raises(MissingRootError):
        load_session(archive_bytes({"project.xml": "<Project><Arrangement/></Project>"}))


def test_manager_load_file(manager, tmp_path, sample_archive_bytes):
    path = tmp_path / "song.dawproject"
    path.write_bytes(sample_archive_bytes)

    result = manager.load_file(path)

    assert result["status"] == "success"
    assert result["file"] == str(path)
    assert result["fingerprint"] == manager.current.fingerprint


def test_failed_load_keeps_previous_session(manager, archive_bytes, sample_archive_bytes):
    manager.load_bytes(sample_archive_bytes)
    previous = manager.current

    with pytest.raises(LoadError):
        manager.load_bytes(archive_bytes({"readme.txt": "no project here"}))
    with pytest.raises(MissingRootError):
        manager.load_bytes(archive_bytes({"project.xml": "<Project/>"}))

    assert manager.current is previous


def test_reload_reports_changes(manager, tmp_path, archive_bytes, sample_archive_bytes):
    path = tmp_path / "song.dawproject"
    path.write_bytes(sample_archive_bytes)
    manager.load_file(path)

    assert manager.reload()["changed"] is False

    path.write_bytes(archive_bytes({"project.xml": "<Project><Structure/></Project>"}))
    result = manager.reload()

    assert result["changed"] is True
    assert manager.current.model.track_count == 0


def test_reload_without_file(manager, sample_archive_bytes):
    with pytest.raises(RuntimeError):
        manager.reload()
    manager.load_bytes(sample_archive_bytes)
    with pytest.raises(RuntimeError):
        manager.reload()


def test_get_project_info(manager, sample_archive_bytes):
    assert manager.get_project_info() == {"loaded": False}

    manager.load_bytes(sample_archive_bytes)
    info = manager.get_project_info()

    assert info["loaded"] is True
    assert info["num_tracks"] == 2
    assert info["num_clips"] == 3
    assert info["num_audio_clips"] == 2
    assert info["num_entries"] == 3
    assert info["document_tempo"] == 128.0
