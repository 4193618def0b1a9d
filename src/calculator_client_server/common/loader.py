"""Read operations files, plain or archived."""
from pathlib import Path
import tarfile
import tempfile
from typing import Callable, Dict, List
import zipfile

import py7zr


def _first_txt(names: List[str], kind: str) -> str:
    txt_files = [name for name in names if name.endswith(".txt")]
    if not txt_files:
        raise ValueError(f"📄❌ No .txt file found in {kind} archive")
    return txt_files[0]


def _read_zip(archive_path: Path, workdir: Path) -> str:
    with zipfile.ZipFile(archive_path, "r") as zf:
        member = _first_txt(zf.namelist(), "zip")
        return zf.read(member).decode()


def _read_tar_xz(archive_path: Path, workdir: Path) -> str:
    with tarfile.open(archive_path, "r:xz") as tf:
        member = _first_txt([m.name for m in tf.getmembers() if m.isfile()], "tar.xz")
        tf.extract(member, path=workdir, filter="data")
    return (workdir / member).read_text()


def _read_7z(archive_path: Path, workdir: Path) -> str:
    with py7zr.SevenZipFile(archive_path, mode="r") as archive:
        member = _first_txt(archive.getnames(), "7z")
        archive.extract(path=workdir, targets=[member])
    return (workdir / member).read_text()


# Archive readers keyed by the (possibly double) suffix they handle
ARCHIVE_READERS: Dict[str, Callable[[Path, Path], str]] = {
    ".zip": _read_zip,
    ".tar.xz": _read_tar_xz,
    ".7z": _read_7z,
}


def archive_kind(path: Path) -> str:
    """
    Return the suffix used to pick a reader: ".txt", ".zip", ".tar.xz" or ".7z".

    :param Path path: Input file path

    :return: Normalised suffix (may be unsupported)
    :rtype: str
    """
    if path.suffixes[-2:] == [".tar", ".xz"]:
        return ".tar.xz"
    return path.suffix


def load_operations(path: Path) -> str:
    """
    Return the text of an operations file.

    Plain ``.txt`` files are read directly; for archives the first ``.txt``
    member is extracted into a temporary directory and read.

    :param Path path: Path to a .txt file or a .zip, .tar.xz or .7z archive

    :return: File content
    :rtype: str
    :raises ValueError: If the format is unsupported or the archive holds no .txt file
    """
    kind = archive_kind(path)
    if kind == ".txt":
        return path.read_text()

    reader = ARCHIVE_READERS.get(kind)
    if reader is None:
        raise ValueError(f"📄❌ Unsupported archive format: {kind or path.name}")

    with tempfile.TemporaryDirectory() as tmpdir:
        return reader(path, Path(tmpdir))
