# -*- coding: utf-8 -*-
"""Tests for turning files and URLs into parseable text."""
import pytest

from paste_parser import text_sources
from paste_parser.errors import UnsupportedSourceError
from paste_parser.text_sources import extract_pdf_text, load_text


class _FakePage:
    def __init__(self, text):
        self._text = text

    def extract_text(self):
        return self._text


class _FakePdf:
    def __init__(self, *texts):
        self.pages = [_FakePage(text) for text in texts]

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


class _FakeResponse:
    def __init__(self, text="", content=b"", content_type="text/plain"):
        self.text = text
        self.content = content
        self.headers = {"Content-Type": content_type}

    def raise_for_status(self) -> None:
        pass


@pytest.fixture
def fake_pdf(monkeypatch):
    """Every PDF reads as two pages plus an empty one."""
    opened = []

    def fake_open(path):
        opened.append(path)
        return _FakePdf(" Week 1: Feb 15 MATH101 Quiz 1 ", None, "Mar 3 CS200 Exam")

    monkeypatch.setattr(text_sources.pdfplumber, "open", fake_open)
    return opened


def test_extract_pdf_text(fake_pdf) -> None:
    text = extract_pdf_text("syllabus.pdf")
    assert text == "Week 1: Feb 15 MATH101 Quiz 1\n\nMar 3 CS200 Exam"
    assert fake_pdf == ["syllabus.pdf"]


def test_load_local_text_file(tmp_path) -> None:
    path = tmp_path / "sheet.tsv"
    path.write_text("Class\tTitle\tDue Date\nMATH101\tHW 1\t2/15/2026\n", encoding="utf-8")
    assert load_text(str(path)).startswith("Class\tTitle")


def test_load_local_pdf(tmp_path, fake_pdf) -> None:
    path = tmp_path / "syllabus.pdf"
    path.write_bytes(b"%PDF-1.4")
    assert "CS200 Exam" in load_text(str(path))


def test_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_text(str(tmp_path / "missing.txt"))


def test_unknown_suffix(tmp_path) -> None:
    path = tmp_path / "sheet.xlsx"
    path.write_bytes(b"PK")
    with pytest.raises(UnsupportedSourceError):
        load_text(str(path))


@pytest.mark.parametrize("name", ["schedule.png", "https://example.edu/photo.JPG"])
def test_images_are_rejected(name: str) -> None:
    with pytest.raises(UnsupportedSourceError, match="image"):
        load_text(name)


def test_download_text(monkeypatch) -> None:
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return _FakeResponse(text="Feb 15 MATH101 Quiz 1")

    monkeypatch.setattr(text_sources.requests, "get", fake_get)
    assert load_text("https://example.edu/syllabus") == "Feb 15 MATH101 Quiz 1"
    assert calls == [("https://example.edu/syllabus", 30)]


def test_download_pdf(monkeypatch, fake_pdf) -> None:
    monkeypatch.setattr(
        text_sources.requests,
        "get",
        lambda url, timeout: _FakeResponse(content=b"%PDF-1.4", content_type="application/pdf"),
    )
    assert "MATH101 Quiz 1" in load_text("https://example.edu/syllabus")
    assert fake_pdf[0].endswith(".pdf")


def test_download_image_content(monkeypatch) -> None:
    monkeypatch.setattr(
        text_sources.requests,
        "get",
        lambda url, timeout: _FakeResponse(content=b"\x89PNG", content_type="image/png"),
    )
    with pytest.raises(UnsupportedSourceError):
        load_text("https://example.edu/schedule")
