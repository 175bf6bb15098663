"""Temporary files and directories staged for a single conversion."""
import logging
import os
import shutil
import tempfile
from typing import List, Optional

logger = logging.getLogger(__name__)


class ArtifactTracker:
    def __init__(self, root: Optional[str] = None, prefix: str = "pdf_images_"):
        self.root = root or tempfile.gettempdir()
        self.prefix = prefix
        self.paths: List[str] = []

    def make_dir(self) -> str:
        os.makedirs(self.root, exist_ok=True)
        path = tempfile.mkdtemp(prefix=self.prefix, dir=self.root)
        self.paths.append(path)
        return path

    def write_file(self, data: bytes, suffix: str = ".pdf") -> str:
        os.makedirs(self.root, exist_ok=True)
        fd, path = tempfile.mkstemp(prefix=self.prefix, suffix=suffix, dir=self.root)
        self.paths.append(path)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        return path

    def cleanup(self) -> None:
        """Remove every tracked path; a failed removal is logged and skipped"""
        while self.paths:
            path = self.paths.pop()
            try:
                if os.path.isdir(path):
                    shutil.rmtree(path)
                elif os.path.exists(path):
                    os.remove(path)
            except OSError as e:
                logger.warning("Could not remove temporary artifact %s: %s", path, e)

    def __enter__(self) -> "ArtifactTracker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
