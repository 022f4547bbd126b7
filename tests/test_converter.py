"""Integration tests for the Converter orchestrator."""

from __future__ import annotations

import io
import json
import xml.etree.ElementTree as ET
import zipfile

import pytest

from oxmlmaker.converter import Converter
from oxmlmaker.errors import ConfigurationError, ModelError
from oxmlmaker.loader import ModelLoader


def read_document(data: bytes) -> str:
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return zf.read("word/document.xml").decode("utf-8")


class TestConverterInit:
    def test_default_parts(self) -> None:
        parts = Converter().parts()
        assert "[Content_Types].xml" in parts
        assert "_rels/.rels" in parts

    def test_template_dir_parts(self, tmp_path) -> None:
        (tmp_path / "_rels").mkdir()
        (tmp_path / "_rels" / ".rels").write_bytes(b"<custom/>")
        parts = Converter(template_dir=tmp_path).parts()
        assert parts == {"_rels/.rels": b"<custom/>"}

    def test_missing_template_dir(self, tmp_path) -> None:
        assert Converter(template_dir=tmp_path / "missing").parts() == {}


class TestConvertData:
    def test_output_is_zip(self, params: dict) -> None:
        data = Converter().convert_data(params)
        assert zipfile.is_zipfile(io.BytesIO(data))

    def test_zip_contains_required_files(self, params: dict) -> None:
        with zipfile.ZipFile(io.BytesIO(Converter().convert_data(params))) as zf:
            names = zf.namelist()
        assert "[Content_Types].xml" in names
        assert "_rels/.rels" in names
        assert "word/document.xml" in names

    def test_content(self, params: dict) -> None:
        document = read_document(Converter().convert_data(params))
        for text in ("Hello, World!", "Name", "Age", "John", "30", "Jane", "25"):
            assert f"<w:t>{text}</w:t>" in document

    def test_accepts_model(self, params: dict) -> None:
        model = ModelLoader().load(params)
        assert read_document(Converter().convert_data(model)) == read_document(
            Converter().convert_data(params)
        )

    def test_template_parts_packaged(self, tmp_path, params: dict) -> None:
        (tmp_path / "word").mkdir()
        (tmp_path / "word" / "styles.xml").write_bytes(b"<styles/>")
        (tmp_path / "word" / "document.xml").write_bytes(b"placeholder")
        data = Converter(template_dir=tmp_path).convert_data(params)
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            assert zf.read("word/styles.xml") == b"<styles/>"
            assert b"Hello, World!" in zf.read("word/document.xml")

    def test_empty_document(self, params: dict) -> None:
        params["sections"] = []
        ET.fromstring(read_document(Converter().convert_data(params)))

    def test_missing_geometry(self, params: dict) -> None:
        del params["page_margin"]
        with pytest.raises(ConfigurationError):
            Converter().convert_data(params)

    def test_invalid_paragraph(self, params: dict) -> None:
        params["sections"].append({"paragraph": "text"})
        with pytest.raises(ModelError):
            Converter().convert_data(params)

    def test_error_handling_with_missing_field(self, params: dict) -> None:
        table = params["sections"][1]["table"]
        table["rows"][0]["cells"].append({"value": "nonexistent_method"})
        document = read_document(Converter().convert_data(params))
        assert "<w:t>John</w:t>" in document
        assert "<w:t>Jane</w:t>" in document
        assert document.count("<w:t></w:t>") == 2

    def test_xml_escaping(self, params: dict) -> None:
        params["sections"][0]["paragraph"]["text"] = "Tom & Jerry"
        params["sections"][1]["table"]["data"][0][0]["name"] = "Tom & Jerry"
        document = read_document(Converter().convert_data(params))
        assert "<w:t>Tom & Jerry</w:t>" in document
        assert "<w:t>Tom &amp; Jerry</w:t>" in document


class TestConvertFile:
    def test_convert_sample_fixture(self, sample_json, tmp_path) -> None:
        out = tmp_path / "output.docx"
        Converter().convert_file(sample_json, out)
        document = read_document(out.read_bytes())
        assert document.count('w:val="restart"') == 6
        assert document.count('w:val="continue"') == 3
        assert "<w:t>VA0002267367</w:t>" in document
        assert "<w:t>Shenzhen BYF Precision Mould Co., Ltd.</w:t>" in document
        ET.fromstring(document)

    def test_output_directory_created(self, tmp_path, params: dict) -> None:
        src = tmp_path / "input.json"
        src.write_text(json.dumps(params), encoding="utf-8")
        out = tmp_path / "subdir" / "nested" / "output.docx"
        Converter().convert_file(src, out)
        assert out.exists()

    def test_encoding_parameter(self, tmp_path, params: dict) -> None:
        params["sections"][0]["paragraph"]["text"] = "Zażółć gęślą jaźń"
        src = tmp_path / "input.json"
        src.write_bytes(json.dumps(params, ensure_ascii=False).encode("utf-16"))
        out = tmp_path / "output.docx"
        Converter().convert_file(src, out, encoding="utf-16")
        assert "Zażółć gęślą jaźń" in read_document(out.read_bytes())

    def test_convert_text(self, params: dict) -> None:
        data = Converter().convert_text(json.dumps(params))
        assert "Hello, World!" in read_document(data)


class TestCreate:
    def test_create_publishes(self, tmp_path, params: dict) -> None:
        converter = Converter(public_dir=tmp_path / "public")
        target = converter.create("test_workflow.docx", params)
        assert target == tmp_path / "public" / "test_workflow.docx"
        assert "Hello, World!" in read_document(target.read_bytes())

    def test_create_with_app_root(self, tmp_path, params: dict) -> None:
        target = Converter(app_root=tmp_path).create("doc.docx", params)
        assert target.parent == tmp_path / "public"

    def test_multiple_documents_in_sequence(self, tmp_path, params: dict) -> None:
        converter = Converter(public_dir=tmp_path)
        for i in range(3):
            params["sections"][0]["paragraph"]["text"] = f"Document {i}"
            converter.create(f"doc_{i}.docx", params)
        for i in range(3):
            assert f"Document {i}" in read_document((tmp_path / f"doc_{i}.docx").read_bytes())

    def test_failed_render_publishes_nothing(self, tmp_path, params: dict) -> None:
        del params["page_size"]
        converter = Converter(public_dir=tmp_path / "public")
        with pytest.raises(ConfigurationError):
            converter.create("broken.docx", params)
        assert not (tmp_path / "public" / "broken.docx").exists()
