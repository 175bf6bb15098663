"""Rendering through pdf2image and the poppler command line tools."""
import shutil
from typing import List, Tuple

try:
    from pdf2image import convert_from_path
    from pdf2image.exceptions import PDFInfoNotInstalledError, PDFPageCountError, PDFSyntaxError
except Exception:
    convert_from_path = None

from pdf_images.exceptions import ConversionError, ConverterUnavailableError
from pdf_images.models import PageImage
from pdf_images.services.artifacts import ArtifactTracker
from pdf_images.services.base import PdfConverter


class Pdf2ImageConverter(PdfConverter):
    name = "pdf2image"

    def ready(self) -> Tuple[bool, str]:
        if convert_from_path is None:
            return False, "pdf2image not installed"
        if shutil.which("pdftoppm") is None:
            return False, "poppler (pdftoppm) not found on PATH"
        return True, ""

    def _render(self, pdf_bytes: bytes, artifacts: ArtifactTracker) -> List[PageImage]:
        ok, msg = self.ready()
        if not ok:
            raise ConverterUnavailableError("Rendering unavailable", msg)

        pdf_path = artifacts.write_file(pdf_bytes, suffix=".pdf")
        out_dir = artifacts.make_dir()
        try:
            images = convert_from_path(pdf_path, dpi=self.dpi, output_folder=out_dir, fmt="png")
        except PDFInfoNotInstalledError as e:
            raise ConverterUnavailableError("Rendering unavailable", str(e))
        except (PDFPageCountError, PDFSyntaxError) as e:
            raise ConversionError("Could not open PDF", str(e))
        except Exception as e:
            raise ConversionError("Could not render PDF", str(e))

        if not images:
            raise ConversionError("PDF has no pages")
        pages: List[PageImage] = []
        for i, img in enumerate(images, start=1):
            try:
                pages.append(PageImage(page_number=i, data=self.encode_pil(img), image_format=self.image_format))
            finally:
                img.close()
        return pages
