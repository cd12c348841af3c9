from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

from codequality.core.config import settings
from codequality.core.errors import UploadError
from codequality.detection.extensions import resolve_language

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    filename: str
    code: str
    language: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class UploadService:
    """
    Turns an uploaded file into source text plus a language tag.

    Nothing is written to disk; the content lives only in the response.
    """

    @staticmethod
    def read_source(filename: str | None, data: bytes) -> SourceFile:
        if len(data) > settings.MAX_UPLOAD_BYTES:
            limit_mb = settings.MAX_UPLOAD_BYTES / (1024 * 1024)
            raise UploadError(f"File size must be less than {limit_mb:g}MB", status_code=413)

        # Undecodable bytes become U+FFFD rather than failing the upload
        code = data.decode("utf-8-sig", errors="replace")
        if "\ufffd" in code:
            logger.warning("Upload %s is not valid UTF-8; undecodable bytes replaced", filename)

        language = resolve_language(filename, code)
        logger.info("Upload %s read: %d bytes, language=%s", filename, len(data), language)
        return SourceFile(filename=filename or "", code=code, language=language)
