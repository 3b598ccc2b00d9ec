# -*- coding: utf-8 -*-
import logging
import os
import tempfile
from pathlib import Path

import pdfplumber
import requests

from paste_parser.errors import UnsupportedSourceError

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".txt", ".csv", ".tsv", ".text", ""}
IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".heic"}


def _is_url(path_or_url: str) -> bool:
    return path_or_url.startswith('http://') or path_or_url.startswith('https://')


def _reject_images(name: str) -> None:
    if Path(name).suffix.lower() in IMAGE_SUFFIXES:
        raise UnsupportedSourceError(
            f"{name} is an image. Images are not read automatically: type the "
            f"assignments out and use smart-paste instead."
        )


def extract_pdf_text(pdf_path: str) -> str:
    """
    Extracts the text of every page of a local PDF, pages separated by a blank line.
    :param pdf_path: A local file path to a PDF file.
    :return: The text contents of the PDF
    """
    pages: list[str] = []
    with pdfplumber.open(pdf_path) as pdf:
        for page in pdf.pages:
            text = page.extract_text()
            if text:
                pages.append(text.strip())
    return "\n\n".join(pages)


def _download(url: str) -> str:
    response = requests.get(url, timeout=30)
    response.raise_for_status()
    content_type = response.headers.get("Content-Type", "")
    if url.lower().endswith(".pdf") or "application/pdf" in content_type:
        with tempfile.NamedTemporaryFile(delete=False, suffix=".pdf") as tmp_file:
            tmp_file.write(response.content)
        try:
            return extract_pdf_text(tmp_file.name)
        finally:
            os.unlink(tmp_file.name)
    if content_type.startswith("image/"):
        raise UnsupportedSourceError(f"{url} is an image; there is no OCR backend.")
    return response.text


def load_text(path_or_url: str) -> str:
    """
    Loads pasteable text from a local file or a URL.
    PDF files are converted with pdfplumber; plain text files are read as UTF-8.
    :param path_or_url: A local file path or an http(s) URL.
    :return: The text to hand to a parser.
    """
    _reject_images(path_or_url)
    if _is_url(path_or_url):
        logger.info("Downloading %s", path_or_url)
        return _download(path_or_url)

    path = Path(path_or_url)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return extract_pdf_text(str(path))
    if suffix not in TEXT_SUFFIXES:
        raise UnsupportedSourceError(f"Don't know how to read {path.name}; use a .txt, .csv, .tsv or .pdf file.")
    return path.read_text(encoding="utf-8")
