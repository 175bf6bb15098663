"""
Conversion strategy interface

A converter turns PDF bytes into an ordered list of page images. Subclasses
implement `_render`; `convert` owns the temporary artifacts of the call and
removes them on every exit path.
"""
import io
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pdf_images.exceptions import ConversionError
from pdf_images.models import ConversionResult, ImageFormat, PageImage
from pdf_images.services.artifacts import ArtifactTracker

logger = logging.getLogger(__name__)


class PdfConverter(ABC):
    name = "base"

    def __init__(
        self,
        dpi: int = 150,
        image_format: ImageFormat = ImageFormat.PNG,
        jpeg_quality: int = 85,
        temp_dir: Optional[str] = None,
    ):
        self.dpi = dpi
        self.image_format = image_format
        self.jpeg_quality = jpeg_quality
        self.temp_dir = temp_dir

    @staticmethod
    def options_from_config(cfg: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "dpi": int(cfg.get("RENDER_DPI", 150)),
            "image_format": ImageFormat.parse(cfg.get("IMAGE_FORMAT", "png")),
            "jpeg_quality": int(cfg.get("JPEG_QUALITY", 85)),
            "temp_dir": cfg.get("TEMP_DIR"),
        }

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "PdfConverter":
        return cls(**cls.options_from_config(cfg))

    def ready(self) -> Tuple[bool, str]:
        return True, ""

    def convert(self, pdf_bytes: bytes) -> ConversionResult:
        """Render every page, or return a failure carrying the reason"""
        with ArtifactTracker(self.temp_dir) as artifacts:
            try:
                pages = self._render(pdf_bytes, artifacts)
            except ConversionError as e:
                logger.warning("%s conversion failed: %s", self.name, e)
                return ConversionResult.failure(str(e), converter=self.name)
        return ConversionResult.success(pages, converter=self.name)

    @abstractmethod
    def _render(self, pdf_bytes: bytes, artifacts: ArtifactTracker) -> List[PageImage]:
        raise NotImplementedError

    def encode_pil(self, img) -> bytes:
        """Encode a Pillow image in the configured output format"""
        buf = io.BytesIO()
        if self.image_format is ImageFormat.JPEG:
            if img.mode not in ("RGB", "L"):
                img = img.convert("RGB")
            img.save(buf, format="JPEG", quality=self.jpeg_quality)
        else:
            img.save(buf, format="PNG")
        return buf.getvalue()
