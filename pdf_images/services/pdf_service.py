"""PDF structure inspection.

Used to describe a document when no page images could be produced.
"""
from __future__ import annotations

import io
import logging
from typing import Any, Dict

import PyPDF2
from PyPDF2.errors import DependencyError, FileNotDecryptedError

logger = logging.getLogger(__name__)


def analyze_pdf(pdf_bytes: bytes) -> Dict[str, Any]:
    """Return page count and encryption flag; pageCount is None if unreadable."""
    info: Dict[str, Any] = {"pageCount": None, "encrypted": False}
    try:
        reader = PyPDF2.PdfReader(io.BytesIO(pdf_bytes))
    except DependencyError as e:
        # Only raised while setting up decryption
        info["encrypted"] = True
        logger.info("PDF analysis failed: %s", e)
        return info
    except Exception as e:
        logger.info("PDF analysis failed: %s", e)
        return info

    info["encrypted"] = bool(reader.is_encrypted)
    try:
        if reader.is_encrypted:
            # Page tree is readable for owner-password-only documents
            reader.decrypt("")
        info["pageCount"] = len(reader.pages)
    except FileNotDecryptedError:
        logger.info("PDF analysis skipped page count: user password required")
    except Exception as e:
        logger.info("PDF analysis failed: %s", e)
    return info
