"""
Test Configuration and Fixtures
"""
import io

import fitz
import pytest
from PIL import Image

from pdf_images import create_app
from pdf_images.exceptions import ConversionError
from pdf_images.models import PageImage
from pdf_images.services.base import PdfConverter


def make_pdf(pages=3, text="Page", **save_options):
    """Build a small real PDF with one line of text per page"""
    doc = fitz.open()
    for i in range(pages):
        page = doc.new_page(width=200, height=260)
        page.insert_text((20, 40), f"{text} {i + 1}")
    data = doc.tobytes(**save_options)
    doc.close()
    return data


def png_bytes(color=(255, 255, 255)):
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color).save(buf, format="PNG")
    return buf.getvalue()


def pdf_upload(data, filename="document.pdf", content_type="application/pdf"):
    return {"pdf": (io.BytesIO(data), filename, content_type)}


class StaticConverter(PdfConverter):
    """Returns a fixed number of tiny PNG pages, staging a file on disk first"""
    name = "static"

    def __init__(self, pages=3, **kwargs):
        super().__init__(**kwargs)
        self.pages = pages
        self.calls = 0

    def _render(self, pdf_bytes, artifacts):
        self.calls += 1
        artifacts.write_file(pdf_bytes)
        return [PageImage(page_number=i, data=png_bytes()) for i in range(1, self.pages + 1)]


class FailingConverter(PdfConverter):
    name = "failing"

    def _render(self, pdf_bytes, artifacts):
        artifacts.write_file(pdf_bytes)
        artifacts.make_dir()
        raise ConversionError("Could not render PDF", "renderer crashed")


class ExplodingConverter(PdfConverter):
    name = "exploding"

    def _render(self, pdf_bytes, artifacts):
        artifacts.make_dir()
        raise RuntimeError("unexpected renderer state")


@pytest.fixture(scope='function')
def app():
    """Create application for testing with the real PyMuPDF converter"""
    app = create_app('testing')
    yield app


@pytest.fixture(scope='function')
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def make_client(tmp_path):
    """Build a test client around a given converter, staging artifacts in tmp_path"""
    def _make(converter, **config):
        converter.temp_dir = str(tmp_path)
        app = create_app('testing', converter=converter)
        app.config.update(config)
        return app.test_client()
    return _make


@pytest.fixture
def sample_pdf():
    return make_pdf(pages=3)


def make_encrypted_pdf(pages=2, method=fitz.PDF_ENCRYPT_AES_256):
    """PDF that needs the user password 'u' to open"""
    return make_pdf(pages=pages, encryption=method, user_pw="u", owner_pw="o")
