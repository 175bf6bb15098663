"""
API Blueprint

Routes:
- POST /convert-pdf-to-images: render an uploaded PDF to page images
- GET  /health: liveness and converter readiness
- GET  /: usage description
"""
from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from flask import Blueprint, current_app, jsonify, request

from pdf_images.exceptions import UploadTooLargeError, ValidationError
from pdf_images.models import ConversionResult, UploadedFile
from pdf_images.services import PdfConverter
from pdf_images.services.pdf_service import analyze_pdf

api_bp = Blueprint('api', __name__)

UPLOAD_FIELD = "pdf"
CONVERSION_FAILED = "Failed to convert PDF to images"
FALLBACK_NOTE = "Server-side rendering failed. Use client-side processing."


# ============ Helper Functions ============

def now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def get_converter() -> PdfConverter:
    return current_app.extensions["pdf_converter"]


def accept_upload() -> UploadedFile:
    """Validate the multipart `pdf` field and read it into memory"""
    file = request.files.get(UPLOAD_FIELD)
    if not file or not (file.filename or "").strip():
        raise ValidationError("No PDF file uploaded")

    upload = UploadedFile.from_storage(file)
    if not upload.is_pdf:
        raise ValidationError("Only PDF files are allowed!")
    if upload.size > current_app.config["MAX_UPLOAD_BYTES"]:
        raise UploadTooLargeError(current_app.config["MAX_UPLOAD_MB"])
    if upload.size == 0:
        raise ValidationError("Uploaded PDF is empty")
    return upload


def success_response(upload: UploadedFile, result: ConversionResult) -> Dict[str, Any]:
    n = result.page_count
    return {
        "success": True,
        "message": f"PDF converted successfully. {n} page{'s' if n != 1 else ''} rendered.",
        "images": [page.to_dict() for page in result.pages],
        "totalPages": n,
        "filename": upload.filename,
        "size": upload.size,
    }


def failure_response(upload: UploadedFile, result: ConversionResult) -> Tuple[Dict[str, Any], int]:
    body: Dict[str, Any] = {
        "success": False,
        "error": CONVERSION_FAILED,
        "details": result.reason,
    }
    if not current_app.config.get("DEGRADED_FALLBACK", True):
        return body, 500

    body.update({
        "filename": upload.filename,
        "size": upload.size,
        "pdfData": upload.as_data_uri(),
        "analysis": analyze_pdf(upload.content),
        "note": FALLBACK_NOTE,
    })
    return body, 200


# ============ API Routes ============

@api_bp.route("/convert-pdf-to-images", methods=["POST"])
def convert_pdf_to_images():
    upload = accept_upload()
    converter = get_converter()
    current_app.logger.info("Converting %s (%d bytes) with %s", upload.filename, upload.size, converter.name)

    try:
        result = converter.convert(upload.content)
    except Exception as e:
        current_app.logger.exception("Error converting PDF")
        return jsonify({
            "success": False,
            "error": CONVERSION_FAILED,
            "details": str(e),
        }), 500

    if not result.ok:
        current_app.logger.warning("Conversion of %s failed: %s", upload.filename, result.reason)
        body, status = failure_response(upload, result)
        return jsonify(body), status

    current_app.logger.info("Rendered %d page(s) from %s", result.page_count, upload.filename)
    return jsonify(success_response(upload, result)), 200


@api_bp.route("/health", methods=["GET"])
def health():
    converter = get_converter()
    ready, msg = converter.ready()
    return jsonify({
        "status": "OK",
        "message": "PDF to Images API is running",
        "timestamp": now_utc_iso(),
        "port": current_app.config["PORT"],
        "environment": current_app.config["ENVIRONMENT"],
        "version": current_app.config.get("APP_VERSION", ""),
        "converter": converter.name,
        "converterReady": ready,
        "converterMessage": msg,
    }), 200


@api_bp.route("/", methods=["GET"])
def index():
    limit_mb = current_app.config["MAX_UPLOAD_MB"]
    return jsonify({
        "message": "PDF to Images API",
        "endpoints": {
            "POST /convert-pdf-to-images": "Convert PDF file to images",
            "GET /health": "Health check",
        },
        "usage": {
            "method": "POST",
            "url": "/convert-pdf-to-images",
            "contentType": "multipart/form-data",
            "body": f'pdf file (field name: "{UPLOAD_FIELD}", max {limit_mb}MB)',
            "response": "JSON with base64 encoded images",
        },
    }), 200
