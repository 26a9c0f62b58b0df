import pytest
from media_renamer.metadata.extract import MetadataExtractor


class CorruptFile(Exception):
    pass


@pytest.fixture
def exif_tags(monkeypatch):
    """
    Stubs the exifread backend. Fill the returned dict with
    basename -> raw tag value; a CorruptFile value makes the read raise.
    """
    tags = {}

    def fake_read(self, path):
        value = tags.get(path.name)
        if value is CorruptFile:
            raise CorruptFile(f"cannot parse {path.name}")
        return value

    monkeypatch.setattr(MetadataExtractor, "_read_tag_exifread", fake_read)
    return tags


@pytest.fixture
def src_root(tmp_path):
    root = tmp_path / "source"
    root.mkdir()
    return root


@pytest.fixture
def dest_root(tmp_path):
    return tmp_path / "destination"


@pytest.fixture
def corrupt_file():
    """Marker value for exif_tags that makes the metadata read fail."""
    return CorruptFile
