"""Native rendering with PyMuPDF."""
import io
from typing import List, Tuple

try:
    import fitz  # PyMuPDF
except Exception:
    fitz = None

try:
    from PIL import Image
except Exception:
    Image = None

from pdf_images.exceptions import ConversionError, ConverterUnavailableError
from pdf_images.models import ImageFormat, PageImage
from pdf_images.services.artifacts import ArtifactTracker
from pdf_images.services.base import PdfConverter


class PyMuPDFConverter(PdfConverter):
    name = "pymupdf"

    def ready(self) -> Tuple[bool, str]:
        if fitz is None:
            return False, "PyMuPDF not available"
        if self.image_format is ImageFormat.JPEG and Image is None:
            return False, "Pillow not available"
        return True, ""

    def _render(self, pdf_bytes: bytes, artifacts: ArtifactTracker) -> List[PageImage]:
        ok, msg = self.ready()
        if not ok:
            raise ConverterUnavailableError("Rendering unavailable", msg)
        try:
            doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        except Exception as e:
            raise ConversionError("Could not open PDF", str(e))

        pages: List[PageImage] = []
        try:
            if doc.needs_pass:
                raise ConversionError("Could not open PDF", "document is password protected")
            if len(doc) == 0:
                raise ConversionError("PDF has no pages")
            for i in range(len(doc)):
                try:
                    pix = doc.load_page(i).get_pixmap(dpi=self.dpi, alpha=False)
                    data = pix.tobytes("png")
                except Exception as e:
                    raise ConversionError(f"Could not render page {i + 1}", str(e))
                if self.image_format is ImageFormat.JPEG:
                    with Image.open(io.BytesIO(data)) as img:
                        data = self.encode_pil(img)
                pages.append(PageImage(page_number=i + 1, data=data, image_format=self.image_format))
        finally:
            doc.close()
        return pages
