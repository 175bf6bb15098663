"""
Conversion strategies

Pick one with the CONVERTER setting. Every strategy exposes the same
`convert(pdf_bytes) -> ConversionResult` call.
"""
import logging
from typing import Any, Dict, Mapping, Type

from pdf_images.services.base import PdfConverter
from pdf_images.services.cloudconvert_service import CloudConvertConverter
from pdf_images.services.passthrough_service import PassthroughConverter
from pdf_images.services.pdf2image_service import Pdf2ImageConverter
from pdf_images.services.pymupdf_service import PyMuPDFConverter

logger = logging.getLogger(__name__)

CONVERTERS: Dict[str, Type[PdfConverter]] = {
    PyMuPDFConverter.name: PyMuPDFConverter,
    Pdf2ImageConverter.name: Pdf2ImageConverter,
    CloudConvertConverter.name: CloudConvertConverter,
    PassthroughConverter.name: PassthroughConverter,
}


def get_converter(cfg: Mapping[str, Any]) -> PdfConverter:
    """Build the configured converter.

    A cloud converter without a credential degrades to passthrough instead of
    failing startup. Unknown names raise ValueError.
    """
    name = (cfg.get("CONVERTER") or PyMuPDFConverter.name).strip().lower()
    if name not in CONVERTERS:
        raise ValueError(f"Unknown converter '{name}'. Available: {', '.join(sorted(CONVERTERS))}")

    converter = CONVERTERS[name].from_config(cfg)
    if isinstance(converter, CloudConvertConverter):
        ok, msg = converter.ready()
        if not ok:
            logger.warning("%s; falling back to passthrough mode", msg)
            return PassthroughConverter(
                reason=f"Remote conversion unavailable: {msg}",
                **PdfConverter.options_from_config(cfg),
            )
    return converter


__all__ = ["CONVERTERS", "PdfConverter", "get_converter"]
