"""
File synchronizer - copies tracked files and directories between the editor
user directory and a snapshot, normalizing text to UTF-8 without BOM.
"""

import codecs
import shutil
from pathlib import Path
from typing import FrozenSet, List

from .models import CopyOutcome


# Files under a copied directory that get re-encoded; everything else is raw
REENCODE_SUFFIXES = {".json", ".code-snippets", ".txt"}

# Byte-order marks honoured when decoding, UTF-32 before UTF-16 (shared prefix)
BOM_ENCODINGS = (
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def decode_text(data: bytes) -> str:
    """Decode by byte-order mark, UTF-8 when there is none. The BOM is dropped."""
    for bom, encoding in BOM_ENCODINGS:
        if data.startswith(bom):
            return data.decode(encoding)
    return data.decode("utf-8")


def normalize_utf8(path: Path) -> None:
    """
    Rewrite a file as UTF-8 without a byte-order mark.

    UTF-16 and UTF-32 files with a BOM are converted; line endings are left
    untouched.

    Raises:
        UnicodeDecodeError: If the file is not valid text in its encoding
        OSError: If the file cannot be read or written
    """
    data = path.read_bytes()
    encoded = decode_text(data).encode("utf-8")
    if encoded != data:
        path.write_bytes(encoded)


class FileSynchronizer:
    """Copies files with per-file outcomes instead of exceptions."""

    def __init__(self, reencode_suffixes=None):
        self.reencode_suffixes = set(reencode_suffixes or REENCODE_SUFFIXES)

    def copy_if_exists(self, src_file: Path, dst_dir: Path) -> CopyOutcome:
        """
        Copy a single file into `dst_dir` when it exists.

        The copy is always re-encoded; if that fails the raw copy stays.

        Returns:
            CopyOutcome. A missing source is SKIPPED with no filesystem change.
        """
        src_file = Path(src_file)
        dst_dir = Path(dst_dir)

        if not src_file.is_file():
            return CopyOutcome.skipped(src_file, "not found")

        dst_file = dst_dir / src_file.name
        try:
            dst_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(src_file, dst_file)
        except OSError as e:
            return CopyOutcome.skipped(src_file, str(e))

        return self._reencode(src_file, dst_file)

    def copy_directory(self, src_dir: Path, dst_dir: Path) -> List[CopyOutcome]:
        """
        Recursively copy `src_dir` into `dst_dir`.

        Every entry is copied, hidden files and symlink targets included.
        Files are handled before subdirectories, both in name order. A failure
        on one child never stops its siblings. A source that cannot be listed
        leaves no destination behind, and a directory link back to one of its
        own ancestors is skipped.

        Returns:
            One CopyOutcome per file encountered
        """
        return self._copy_tree(Path(src_dir), Path(dst_dir), frozenset())

    def _copy_tree(self, src_dir: Path, dst_dir: Path, ancestors: FrozenSet[Path]) -> List[CopyOutcome]:
        outcomes: List[CopyOutcome] = []

        try:
            resolved = src_dir.resolve()
            entries = sorted(src_dir.iterdir(), key=lambda p: p.name)
        except OSError as e:
            return [CopyOutcome.skipped(src_dir, str(e))]

        if resolved in ancestors:
            return [CopyOutcome.skipped(src_dir, "directory link loop")]
        ancestors = ancestors | {resolved}

        try:
            dst_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return [CopyOutcome.skipped(src_dir, str(e))]

        subdirs = [e for e in entries if e.is_dir()]
        files = [e for e in entries if not e.is_dir()]

        for src_file in files:
            dst_file = dst_dir / src_file.name
            try:
                shutil.copyfile(src_file, dst_file)
            except OSError as e:
                outcomes.append(CopyOutcome.skipped(src_file, str(e)))
                continue

            if src_file.suffix.lower() in self.reencode_suffixes:
                outcomes.append(self._reencode(src_file, dst_file))
            else:
                outcomes.append(CopyOutcome.copied_raw(src_file, dst_file))

        for subdir in subdirs:
            outcomes.extend(self._copy_tree(subdir, dst_dir / subdir.name, ancestors))

        return outcomes

    def _reencode(self, src_file: Path, dst_file: Path) -> CopyOutcome:
        try:
            normalize_utf8(dst_file)
        except UnicodeDecodeError:
            return CopyOutcome.copied_raw(src_file, dst_file, "not decodable as text")
        except OSError as e:
            return CopyOutcome.copied_raw(src_file, dst_file, str(e))
        return CopyOutcome.copied(src_file, dst_file)
