"""Strategy for hosts without any rendering support."""
from typing import List, Tuple

from pdf_images.exceptions import ConverterUnavailableError
from pdf_images.models import PageImage
from pdf_images.services.artifacts import ArtifactTracker
from pdf_images.services.base import PdfConverter


class PassthroughConverter(PdfConverter):
    """Never renders; the API answers with the original PDF for client-side processing"""
    name = "passthrough"

    def __init__(self, reason: str = "Server-side rendering is disabled", **kwargs):
        super().__init__(**kwargs)
        self.reason = reason

    def ready(self) -> Tuple[bool, str]:
        return False, self.reason

    def _render(self, pdf_bytes: bytes, artifacts: ArtifactTracker) -> List[PageImage]:
        raise ConverterUnavailableError("Rendering unavailable", self.reason)
