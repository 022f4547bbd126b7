"""Tests for publishing documents to the public directory."""

from __future__ import annotations

from pathlib import Path

import pytest

from oxmlmaker.publisher import Publisher, resolve_public_dir


class TestResolvePublicDir:
    def test_default(self) -> None:
        assert resolve_public_dir() == Path("public")

    def test_app_root(self) -> None:
        assert resolve_public_dir(app_root="/srv/app") == Path("/srv/app/public")

    def test_explicit_dir_wins(self, tmp_path) -> None:
        assert resolve_public_dir(tmp_path / "out", app_root="/srv/app") == tmp_path / "out"


class TestPublisher:
    def test_publish_creates_directory(self, tmp_path) -> None:
        public = tmp_path / "auto_created_public"
        publisher = Publisher(public_dir=public)
        target = publisher.publish(b"test content", "report.docx")
        assert target == public / "report.docx"
        assert target.read_bytes() == b"test content"

    def test_publish_under_app_root(self, tmp_path) -> None:
        target = Publisher(app_root=tmp_path).publish(b"x", "a.docx")
        assert target == tmp_path / "public" / "a.docx"

    def test_publish_overwrites(self, tmp_path) -> None:
        publisher = Publisher(public_dir=tmp_path)
        publisher.publish(b"first", "a.docx")
        publisher.publish(b"second", "a.docx")
        assert (tmp_path / "a.docx").read_bytes() == b"second"

    def test_filename_stays_inside_public_dir(self, tmp_path) -> None:
        target = Publisher(public_dir=tmp_path).destination("../../etc/evil.docx")
        assert target == tmp_path / "evil.docx"

    def test_empty_filename(self, tmp_path) -> None:
        with pytest.raises(ValueError):
            Publisher(public_dir=tmp_path).destination("")
