"""Tests for the file synchronizer."""

import sys

import pytest

from vscode_sync.snapshot.files import FileSynchronizer, normalize_utf8
from vscode_sync.snapshot.models import CopyStatus


BOM = b"\xef\xbb\xbf"


@pytest.fixture
def sync():
    return FileSynchronizer()


class TestNormalizeUtf8:
    def test_strips_bom(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_bytes(BOM + b'{"a": 1}')

        normalize_utf8(path)

        assert path.read_bytes() == b'{"a": 1}'

    def test_keeps_line_endings(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_bytes(b"{\r\n}\r\n")

        normalize_utf8(path)

        assert path.read_bytes() == b"{\r\n}\r\n"

    @pytest.mark.parametrize("encoding", ["utf-16-le", "utf-16-be", "utf-32-le", "utf-32-be"])
    def test_converts_wide_encodings_with_bom(self, tmp_path, encoding):
        path = tmp_path / "a.json"
        path.write_bytes("\ufeff{\"k\": \"\u00e9\"}\r\n".encode(encoding))

        normalize_utf8(path)

        assert path.read_bytes() == "{\"k\": \"\u00e9\"}\r\n".encode("utf-8")

    def test_invalid_utf8_raises(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_bytes(b"\x80\x81{}")

        with pytest.raises(UnicodeDecodeError):
            normalize_utf8(path)


class TestCopyIfExists:
    def test_missing_source_is_skipped_without_side_effects(self, sync, tmp_path):
        dst = tmp_path / "out"

        outcome = sync.copy_if_exists(tmp_path / "settings.json", dst)

        assert outcome.status == CopyStatus.SKIPPED
        assert outcome.missing_source
        assert not dst.exists()

    def test_copies_and_strips_bom(self, sync, tmp_path):
        src = tmp_path / "settings.json"
        src.write_bytes(BOM + b'{"x": true}')

        outcome = sync.copy_if_exists(src, tmp_path / "out")

        assert outcome.status == CopyStatus.COPIED
        assert (tmp_path / "out" / "settings.json").read_bytes() == b'{"x": true}'
        # Source is never touched
        assert src.read_bytes().startswith(BOM)

    def test_overwrites_existing_destination(self, sync, tmp_path):
        src = tmp_path / "settings.json"
        src.write_text("{}", encoding="utf-8")
        dst = tmp_path / "out"
        dst.mkdir()
        (dst / "settings.json").write_text('{"old": 1}', encoding="utf-8")

        sync.copy_if_exists(src, dst)

        assert (dst / "settings.json").read_text(encoding="utf-8") == "{}"

    def test_non_utf8_keeps_raw_copy(self, sync, tmp_path):
        src = tmp_path / "settings.json"
        src.write_bytes(b"{\"a\": \x80\x81}")

        outcome = sync.copy_if_exists(src, tmp_path / "out")

        assert outcome.status == CopyStatus.COPIED_RAW
        assert outcome.written
        assert (tmp_path / "out" / "settings.json").read_bytes() == b"{\"a\": \x80\x81}"


class TestCopyDirectory:
    def test_copies_tree_recursively(self, sync, user_dir, tmp_path):
        dst = tmp_path / "out" / "snippets"

        outcomes = sync.copy_directory(user_dir / "snippets", dst)

        assert (dst / "python.json").read_bytes() == b'{"print": {"prefix": "pr"}}'
        assert (dst / "nested" / "x.code-snippets").read_text(encoding="utf-8") == "{}"
        assert len(outcomes) == 3
        assert all(o.written for o in outcomes)

    def test_unknown_suffix_copied_byte_for_byte(self, sync, user_dir, tmp_path):
        dst = tmp_path / "out"

        outcomes = sync.copy_directory(user_dir / "snippets", dst)

        binary = [o for o in outcomes if o.source.name == "icon.bin"][0]
        assert binary.status == CopyStatus.COPIED_RAW
        assert (dst / "icon.bin").read_bytes() == BOM + b"\x00\xff\x00"

    def test_files_before_subdirectories(self, sync, user_dir, tmp_path):
        outcomes = sync.copy_directory(user_dir / "snippets", tmp_path / "out")

        names = [o.source.name for o in outcomes]
        assert names == ["icon.bin", "python.json", "x.code-snippets"]

    def test_hidden_files_are_copied(self, sync, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / ".hidden.json").write_text("{}", encoding="utf-8")

        sync.copy_directory(src, tmp_path / "out")

        assert (tmp_path / "out" / ".hidden.json").exists()

    def test_suffix_match_is_case_insensitive(self, sync, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "A.JSON").write_bytes(BOM + b"{}")

        outcomes = sync.copy_directory(src, tmp_path / "out")

        assert outcomes[0].status == CopyStatus.COPIED
        assert (tmp_path / "out" / "A.JSON").read_bytes() == b"{}"

    def test_empty_directory_creates_destination(self, sync, tmp_path):
        src = tmp_path / "src"
        src.mkdir()

        outcomes = sync.copy_directory(src, tmp_path / "out")

        assert outcomes == []
        assert (tmp_path / "out").is_dir()

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_one_failure_does_not_stop_siblings(self, sync, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "a.json").write_text("{}", encoding="utf-8")
        (src / "broken.json").symlink_to(tmp_path / "does-not-exist")
        (src / "z.json").write_text("[]", encoding="utf-8")

        outcomes = sync.copy_directory(src, tmp_path / "out")

        statuses = {o.source.name: o.status for o in outcomes}
        assert statuses["broken.json"] == CopyStatus.SKIPPED
        assert statuses["a.json"] == CopyStatus.COPIED
        assert statuses["z.json"] == CopyStatus.COPIED
        assert (tmp_path / "out" / "z.json").exists()

    def test_missing_source_directory_reports_skip(self, sync, tmp_path):
        outcomes = sync.copy_directory(tmp_path / "nope", tmp_path / "out")

        assert len(outcomes) == 1
        assert outcomes[0].status == CopyStatus.SKIPPED
        assert not (tmp_path / "out").exists()

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_directory_link_to_ancestor_is_not_followed(self, sync, tmp_path):
        src = tmp_path / "src"
        (src / "inner").mkdir(parents=True)
        (src / "a.json").write_text("{}", encoding="utf-8")
        (src / "inner" / "up").symlink_to(src, target_is_directory=True)

        outcomes = sync.copy_directory(src, tmp_path / "out")

        loop = [o for o in outcomes if o.source.name == "up"]
        assert len(loop) == 1
        assert loop[0].status == CopyStatus.SKIPPED
        assert (tmp_path / "out" / "a.json").exists()
        assert not (tmp_path / "out" / "inner" / "up").exists()
