import os
import json
import subprocess
import pytest
from datetime import datetime, timezone

import media_renamer.metadata.extract as extract_module
from media_renamer.metadata.extract import MetadataExtractor, parse_exif_date
from media_renamer import config


class MockTag:
    def __init__(self, value):
        self.value = value

    def __str__(self):
        return self.value


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("2021:05:03 14:02:09", datetime(2021, 5, 3, 14, 2, 9, tzinfo=timezone.utc)),
        ("2021:05:03 14:02:09\x00", datetime(2021, 5, 3, 14, 2, 9, tzinfo=timezone.utc)),
        ("2021:05:03 14:02:09.123+02:00", datetime(2021, 5, 3, 14, 2, 9, tzinfo=timezone.utc)),
        ("0000:00:00 00:00:00", None),
        ("2021-05-03 14:02:09", None),
        ("    :  :     :  :  ", None),
        ("2021:05:03", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_exif_date(raw, expected):
    assert parse_exif_date(raw) == expected


def test_video_uses_modification_time(monkeypatch, tmp_path):
    vid = tmp_path / "clip.mp4"
    vid.write_bytes(b"video")
    stamp = datetime(2020, 2, 29, 23, 59, 58, tzinfo=timezone.utc).timestamp()
    os.utime(vid, (stamp, stamp))

    def boom(*args, **kwargs):
        raise AssertionError("video metadata must not be read")
    monkeypatch.setattr(MetadataExtractor, "_read_tag_exifread", boom)

    dt = MetadataExtractor().get_capture_datetime(vid, config.VIDEO)
    assert dt == datetime(2020, 2, 29, 23, 59, 58, tzinfo=timezone.utc)


def test_unrecognized_has_no_capture_time(tmp_path):
    p = tmp_path / "notes.txt"
    p.write_text("x")
    assert MetadataExtractor().get_capture_datetime(p, config.UNRECOGNIZED) is None


def test_exifread_backend_reads_configured_tag(monkeypatch, tmp_path):
    img = tmp_path / "img.jpg"
    img.write_bytes(b"jpeg")
    monkeypatch.setattr(
        extract_module.exifread, "process_file",
        lambda f, details=False: {
            "Image DateTime": MockTag("2019:01:01 00:00:00"),
            "EXIF DateTimeOriginal": MockTag("2018:07:14 08:30:00"),
        },
    )

    original = MetadataExtractor().get_image_datetime(img)
    modified = MetadataExtractor(date_tag="DateTime").get_image_datetime(img)

    assert original == datetime(2018, 7, 14, 8, 30, 0, tzinfo=timezone.utc)
    assert modified == datetime(2019, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


def test_exifread_backend_without_tags(monkeypatch, tmp_path):
    img = tmp_path / "img.jpg"
    img.write_bytes(b"jpeg")
    monkeypatch.setattr(extract_module.exifread, "process_file", lambda f, details=False: {})

    assert MetadataExtractor().get_image_datetime(img) is None


def test_exifread_failure_is_absent(monkeypatch, tmp_path):
    img = tmp_path / "broken.jpg"
    img.write_bytes(b"\xff\xd8garbage")

    def explode(f, details=False):
        raise ValueError("corrupt")
    monkeypatch.setattr(extract_module.exifread, "process_file", explode)

    assert MetadataExtractor().get_image_datetime(img) is None


def test_missing_file_is_absent(tmp_path):
    assert MetadataExtractor().get_image_datetime(tmp_path / "gone.jpg") is None


def test_exiftool_backend(monkeypatch, tmp_path):
    img = tmp_path / "img.jpg"
    img.write_bytes(b"jpeg")
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        assert kwargs["timeout"] == config.EXIFTOOL_TIMEOUT
        out = json.dumps([{"SourceFile": str(img), "DateTimeOriginal": "2021:05:03 14:02:09"}])
        return subprocess.CompletedProcess(cmd, 0, stdout=out, stderr="")
    monkeypatch.setattr(extract_module.subprocess, "run", fake_run)

    dt = MetadataExtractor(backend=config.BACKEND_EXIFTOOL).get_image_datetime(img)

    assert dt == datetime(2021, 5, 3, 14, 2, 9, tzinfo=timezone.utc)
    assert calls == [["exiftool", "-j", "-DateTimeOriginal", str(img)]]


def test_exiftool_backend_without_tag(monkeypatch, tmp_path):
    img = tmp_path / "img.jpg"
    img.write_bytes(b"jpeg")
    out = json.dumps([{"SourceFile": str(img)}])
    monkeypatch.setattr(
        extract_module.subprocess, "run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 0, stdout=out, stderr=""),
    )

    assert MetadataExtractor(backend=config.BACKEND_EXIFTOOL).get_image_datetime(img) is None


@pytest.mark.parametrize(
    "error,stdout",
    [
        (FileNotFoundError("exiftool"), None),
        (subprocess.CalledProcessError(1, ["exiftool"]), None),
        (subprocess.TimeoutExpired(["exiftool"], config.EXIFTOOL_TIMEOUT), None),
        (None, "not json"),
    ],
)
def test_exiftool_failures_are_absent(monkeypatch, tmp_path, error, stdout):
    img = tmp_path / "img.jpg"
    img.write_bytes(b"jpeg")

    def fake_run(cmd, **kwargs):
        if error is not None:
            raise error
        return subprocess.CompletedProcess(cmd, 0, stdout=stdout, stderr="")
    monkeypatch.setattr(extract_module.subprocess, "run", fake_run)

    assert MetadataExtractor(backend=config.BACKEND_EXIFTOOL).get_image_datetime(img) is None


def test_unknown_backend_rejected():
    with pytest.raises(ValueError):
        MetadataExtractor(backend="magic")
