"""
Remote rendering through the CloudConvert v2 job API.

One job per request: upload the PDF to an import task, convert it to one image
per page, and fetch the exported files. The job is polled at a fixed interval
for a fixed number of attempts; running out of attempts is a conversion
failure.
"""
import logging
import re
import time
from typing import Any, Dict, List, Mapping, Optional, Tuple

import requests

from pdf_images.exceptions import ConversionError, ConverterUnavailableError
from pdf_images.models import ImageFormat, PageImage
from pdf_images.services.artifacts import ArtifactTracker
from pdf_images.services.base import PdfConverter

logger = logging.getLogger(__name__)

IMPORT_TASK = "import-pdf"
CONVERT_TASK = "convert-pdf"
EXPORT_TASK = "export-pages"

PAGE_NUMBER_RE = re.compile(r"(\d+)\.[A-Za-z0-9]+$")


def export_page_number(filename: str) -> int:
    """CloudConvert names multi-page output `<name>-<n>.<ext>`"""
    m = PAGE_NUMBER_RE.search(filename or "")
    return int(m.group(1)) if m else 0


class CloudConvertConverter(PdfConverter):
    name = "cloudconvert"

    def __init__(
        self,
        api_key: str = "",
        api_url: str = "https://api.cloudconvert.com/v2",
        poll_interval: float = 2.0,
        poll_attempts: int = 30,
        timeout: int = 60,
        session: Optional[requests.Session] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.api_key = (api_key or "").strip()
        self.api_url = api_url.rstrip("/")
        self.poll_interval = poll_interval
        self.poll_attempts = max(int(poll_attempts), 1)
        self.timeout = timeout
        # Injected sessions are reused; otherwise each conversion opens its own
        self.session = session

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "CloudConvertConverter":
        return cls(
            api_key=cfg.get("CLOUDCONVERT_API_KEY", ""),
            api_url=cfg.get("CLOUDCONVERT_API_URL", "https://api.cloudconvert.com/v2"),
            poll_interval=float(cfg.get("CLOUDCONVERT_POLL_INTERVAL", 2)),
            poll_attempts=int(cfg.get("CLOUDCONVERT_POLL_ATTEMPTS", 30)),
            timeout=int(cfg.get("CLOUDCONVERT_TIMEOUT", 60)),
            **cls.options_from_config(cfg),
        )

    def ready(self) -> Tuple[bool, str]:
        if not self.api_key:
            return False, "CLOUDCONVERT_API_KEY is missing"
        return True, ""

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def _output_format(self) -> str:
        return "jpg" if self.image_format is ImageFormat.JPEG else "png"

    def job_payload(self) -> Dict[str, Any]:
        convert: Dict[str, Any] = {
            "operation": "convert",
            "input": IMPORT_TASK,
            "input_format": "pdf",
            "output_format": self._output_format(),
            "pixel_density": self.dpi,
        }
        if self.image_format is ImageFormat.JPEG:
            convert["quality"] = self.jpeg_quality
        return {
            "tasks": {
                IMPORT_TASK: {"operation": "import/upload"},
                CONVERT_TASK: convert,
                EXPORT_TASK: {"operation": "export/url", "input": CONVERT_TASK},
            },
            "tag": "pdf-to-images",
        }

    def _request(self, session: requests.Session, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            resp = session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise ConversionError("CloudConvert request failed", str(e))
        if resp.status_code >= 400:
            raise ConversionError(
                f"CloudConvert returned HTTP {resp.status_code}",
                (resp.text or "")[:500],
            )
        return resp

    def _api(self, session: requests.Session, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        resp = self._request(session, method, f"{self.api_url}{path}", headers=self._headers(), **kwargs)
        try:
            return resp.json().get("data") or {}
        except ValueError as e:
            raise ConversionError("CloudConvert returned invalid JSON", str(e))

    @staticmethod
    def _task(job: Dict[str, Any], name: str) -> Dict[str, Any]:
        for task in job.get("tasks") or []:
            if task.get("name") == name:
                return task
        raise ConversionError("CloudConvert job is missing a task", name)

    def create_job(self, session: requests.Session) -> Dict[str, Any]:
        return self._api(session, "POST", "/jobs", json=self.job_payload())

    def upload(self, session: requests.Session, job: Dict[str, Any], pdf_bytes: bytes) -> None:
        form = (self._task(job, IMPORT_TASK).get("result") or {}).get("form") or {}
        url = form.get("url")
        if not url:
            raise ConversionError("CloudConvert import task has no upload form")
        self._request(
            session,
            "POST",
            url,
            data=form.get("parameters") or {},
            files={"file": ("document.pdf", pdf_bytes, "application/pdf")},
        )

    def wait_for_job(self, session: requests.Session, job_id: str) -> Dict[str, Any]:
        """Poll until the job finishes, errors, or the attempt budget runs out"""
        for attempt in range(1, self.poll_attempts + 1):
            job = self._api(session, "GET", f"/jobs/{job_id}")
            status = (job.get("status") or "").lower()
            if status == "finished":
                return job
            if status == "error":
                failed = [t for t in job.get("tasks") or [] if (t.get("status") or "") == "error"]
                reason = "; ".join(t.get("message") or t.get("code") or "error" for t in failed)
                raise ConversionError("CloudConvert job failed", reason or None)
            logger.debug("CloudConvert job %s is %s (attempt %d/%d)", job_id, status, attempt, self.poll_attempts)
            if attempt < self.poll_attempts:
                time.sleep(self.poll_interval)
        raise ConversionError(
            "CloudConvert job timed out",
            f"not finished after {self.poll_attempts} attempts",
        )

    def download_pages(self, session: requests.Session, job: Dict[str, Any]) -> List[PageImage]:
        files = (self._task(job, EXPORT_TASK).get("result") or {}).get("files") or []
        if not files:
            raise ConversionError("CloudConvert produced no images")
        files = sorted(files, key=lambda f: export_page_number(f.get("filename") or ""))
        pages: List[PageImage] = []
        for i, f in enumerate(files, start=1):
            resp = self._request(session, "GET", f.get("url") or "")
            pages.append(PageImage(page_number=i, data=resp.content, image_format=self.image_format))
        return pages

    def _render(self, pdf_bytes: bytes, artifacts: ArtifactTracker) -> List[PageImage]:
        ok, msg = self.ready()
        if not ok:
            raise ConverterUnavailableError("Rendering unavailable", msg)
        session = self.session or requests.Session()
        try:
            job = self.create_job(session)
            job_id = job.get("id")
            if not job_id:
                raise ConversionError("CloudConvert did not return a job id")
            self.upload(session, job, pdf_bytes)
            logger.info("CloudConvert job %s started", job_id)
            finished = self.wait_for_job(session, job_id)
            return self.download_pages(session, finished)
        finally:
            if session is not self.session:
                session.close()
