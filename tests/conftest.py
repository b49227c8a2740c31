from __future__ import annotations

import io
import struct
import zipfile

import pytest
from PIL import Image


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    # No stray config.json / logging config from the developer's machine.
    monkeypatch.chdir(tmp_path)
    for key in ("COVER_CFG", "LOG_CFG", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def image_bytes():
    def _make(fmt="JPEG", size=(40, 60), color=(200, 30, 30), mode="RGB"):
        buf = io.BytesIO()
        Image.new(mode, size, color).save(buf, format=fmt)
        return buf.getvalue()

    return _make


@pytest.fixture()
def make_archive(tmp_path):
    """Build a zip from (name, bytes) pairs, kept in the given order."""

    def _make(entries, name="book.cbz"):
        path = tmp_path / name
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for entry_name, data in entries:
                zf.writestr(entry_name, data)
        return path

    return _make


@pytest.fixture()
def patch_headers():
    """Rewrite compression method / flag bits of the first entry of a zip."""

    def _patch(path, method=None, flag_bits=None):
        data = bytearray(path.read_bytes())
        local = data.find(b"PK\x03\x04")
        central = data.find(b"PK\x01\x02")
        if method is not None:
            struct.pack_into("<H", data, local + 8, method)
            struct.pack_into("<H", data, central + 10, method)
        if flag_bits is not None:
            struct.pack_into("<H", data, local + 6, flag_bits)
            struct.pack_into("<H", data, central + 8, flag_bits)
        path.write_bytes(bytes(data))
        return path

    return _patch
