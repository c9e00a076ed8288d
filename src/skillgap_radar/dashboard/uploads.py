"""Session bookkeeping for résumé uploads in the web UI."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any

from skillgap_radar.errors import IngestionError
from skillgap_radar.parsers.resume_parser import ingest_resume

logger = logging.getLogger(__name__)


def ingest_upload(
    session: MutableMapping[str, Any],
    uploaded_file,
    max_bytes: int | None = None,
) -> None:
    """Convert an upload into a payload once per distinct file.

    Streamlit gives every upload its own ``file_id``, so a different file
    that happens to share a name and size is still ingested. On success the
    session holds ``resume_payload`` and ``resume_name``; on failure it
    holds ``resume_error``.
    """
    file_id = uploaded_file.file_id
    if session.get("resume_file_id") == file_id:
        return
    session["resume_file_id"] = file_id
    session.pop("resume_payload", None)
    try:
        payload = ingest_resume(
            uploaded_file.name,
            uploaded_file.getvalue(),
            uploaded_file.type,
            max_bytes=max_bytes,
        )
    except IngestionError as exc:
        logger.exception("Résumé ingestion failed")
        session["resume_error"] = str(exc)
        return
    session.pop("resume_error", None)
    session["resume_payload"] = payload
    session["resume_name"] = uploaded_file.name
