"""
Request-scoped data types

Key Models:
- UploadedFile: the PDF payload of one request
- PageImage: one rendered page
- ConversionResult: success with ordered pages, or failure with a reason

Nothing here is persisted; every instance lives for a single request.
"""
import base64
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


PDF_MIME_TYPE = "application/pdf"


class ImageFormat(enum.Enum):
    PNG = "png"
    JPEG = "jpeg"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        return "jpg" if self is ImageFormat.JPEG else self.value

    @classmethod
    def parse(cls, value: str) -> "ImageFormat":
        """Accept png, jpeg or jpg in any case"""
        v = (value or "").strip().lower()
        if v == "jpg":
            v = "jpeg"
        try:
            return cls(v)
        except ValueError:
            raise ValueError(f"Unsupported image format: {value}")


def data_uri(mime_type: str, data: bytes) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


@dataclass
class UploadedFile:
    content: bytes
    content_type: str
    filename: str
    size: int

    @classmethod
    def from_storage(cls, file_storage) -> "UploadedFile":
        """Read a werkzeug FileStorage fully into memory"""
        content = file_storage.read()
        return cls(
            content=content,
            content_type=(file_storage.mimetype or "").lower(),
            filename=file_storage.filename or "",
            size=len(content),
        )

    @property
    def is_pdf(self) -> bool:
        return self.content_type == PDF_MIME_TYPE

    def as_data_uri(self) -> str:
        return data_uri(PDF_MIME_TYPE, self.content)


@dataclass
class PageImage:
    page_number: int
    data: bytes
    image_format: ImageFormat = ImageFormat.PNG

    @property
    def filename(self) -> str:
        return f"page-{self.page_number}.{self.image_format.extension}"

    @property
    def data_uri(self) -> str:
        return data_uri(self.image_format.mime_type, self.data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "dataUrl": self.data_uri,
            "page": self.page_number,
            "format": self.image_format.value,
        }


@dataclass
class ConversionResult:
    ok: bool
    pages: List[PageImage] = field(default_factory=list)
    reason: Optional[str] = None
    converter: str = ""

    @classmethod
    def success(cls, pages: List[PageImage], converter: str = "") -> "ConversionResult":
        if not pages:
            raise ValueError("A successful conversion needs at least one page")
        numbers = [p.page_number for p in pages]
        if numbers != list(range(1, len(pages) + 1)):
            raise ValueError(f"Page numbers must run 1..{len(pages)} in order, got {numbers}")
        return cls(ok=True, pages=list(pages), converter=converter)

    @classmethod
    def failure(cls, reason: str, converter: str = "") -> "ConversionResult":
        return cls(ok=False, reason=reason or "Unknown conversion error", converter=converter)

    @property
    def page_count(self) -> int:
        return len(self.pages)
