"""Test function load_operations."""
from pathlib import Path
import tarfile
import zipfile

import py7zr
import pytest

from calculator_client_server.common.loader import archive_kind, load_operations


@pytest.fixture
def ops_txt(tmp_path: Path) -> Path:
    """Create a plain operations file."""
    txt = tmp_path / "ops.txt"
    txt.write_text("3 + 3\n")
    return txt


@pytest.mark.parametrize("name,expected", [
    ("ops.txt", ".txt"),
    ("ops.zip", ".zip"),
    ("ops.tar.xz", ".tar.xz"),
    ("ops.7z", ".7z"),
    ("ops.rar", ".rar"),
])
def test_archive_kind(name, expected) -> None:
    """archive_kind recognises double suffixes."""
    assert archive_kind(Path(name)) == expected


def test_load_txt(ops_txt: Path) -> None:
    """Plain text files are read directly."""
    assert load_operations(ops_txt) == "3 + 3\n"


def test_load_zip(tmp_path: Path, ops_txt: Path) -> None:
    """Check that a .zip archive can be read."""
    zip_path = tmp_path / "ops.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        zf.write(ops_txt, arcname="ops.txt")

    assert load_operations(zip_path) == "3 + 3\n"


def test_load_tar_xz(tmp_path: Path, ops_txt: Path) -> None:
    """Check that a .tar.xz archive can be read."""
    tar_path = tmp_path / "ops.tar.xz"
    with tarfile.open(tar_path, "w:xz") as tf:
        tf.add(ops_txt, arcname="ops.txt")

    assert load_operations(tar_path) == "3 + 3\n"


def test_load_7z(tmp_path: Path, ops_txt: Path) -> None:
    """Check that a .7z archive can be read."""
    archive_path = tmp_path / "ops.7z"
    with py7zr.SevenZipFile(archive_path, "w") as archive:
        archive.write(ops_txt, arcname="ops.txt")

    assert load_operations(archive_path) == "3 + 3\n"


def test_load_archive_without_txt(tmp_path: Path) -> None:
    """Loading fails if no .txt file exists in the archive."""
    zip_path = tmp_path / "empty.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        zf.writestr("data.bin", b"\x00\x01")

    with pytest.raises(ValueError):
        load_operations(zip_path)


def test_load_unsupported_format(tmp_path: Path) -> None:
    """Unsupported formats raise a ValueError."""
    file_path = tmp_path / "ops.rar"
    file_path.write_text("1 + 1")

    with pytest.raises(ValueError):
        load_operations(file_path)
