import io
import zipfile

import numpy as np
import pytest
import soundfile as sf


SAMPLE_PROJECT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Project version="1.0">
  <Transport>
    <Tempo unit="bpm" value="128"/>
  </Transport>
  <Structure>
    <Track name="Drums">
      <Lanes>
        <Clips>
          <Clip name="Loop A" time="0">
            <Audio><File path="audio/drums.wav"/></Audio>
          </Clip>
          <Clip name="Loop B" time="4">
            <Warps><Audio><File path="audio/fill.wav"/></Audio></Warps>
          </Clip>
        </Clips>
      </Lanes>
    </Track>
    <Track name="Keys">
      <Lanes>
        <Clips>
          <Clip name="Chords" time="8"><Notes/></Clip>
        </Clips>
      </Lanes>
    </Track>
  </Structure>
</Project>
"""


def _wav_bytes(frames=8, sample_rate=44100, channels=1, value=1000, subtype="PCM_16"):
    dtype = np.float32 if subtype == "FLOAT" else np.int16
    buffer = io.BytesIO()
    sf.write(buffer, np.full((frames, channels), value, dtype=dtype), sample_rate, format="WAV", subtype=subtype)
    return buffer.getvalue()


def _archive_bytes(entries):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def wav_bytes():
    """Factory building small WAV files (16-bit PCM unless a subtype is given)."""
    return _wav_bytes


@pytest.fixture
def archive_bytes():
    """Factory building ZIP containers from a {path: bytes-or-str} mapping."""
    return _archive_bytes


@pytest.fixture
def sample_project_xml():
    return SAMPLE_PROJECT_XML


@pytest.fixture
def sample_archive_bytes():
    return _archive_bytes({
        "project.xml": SAMPLE_PROJECT_XML,
        "audio/drums.wav": _wav_bytes(),
        "audio/fill.wav": _wav_bytes(frames=4),
    })
