"""
app/api/dependencies.py

Shared FastAPI dependencies that extract import inputs from multipart bodies.

Missing parts resolve to None; the import service decides what is required.
"""

from __future__ import annotations

import re

from fastapi import File, Form, UploadFile

from app.domain.spend_import import UploadedSpendFile

_STORE_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

# Range of the BIGINT store_id columns.
_STORE_ID_MIN = -(2**63)
_STORE_ID_MAX = 2**63 - 1


def get_store_id(store_id: str | None = Form(default=None)) -> int | None:
    """
    Parse the ``store_id`` form field.

    Only ASCII decimal integers within the BIGINT range are accepted; anything
    else counts as absent.
    """

    if store_id is None:
        return None
    value = store_id.strip()
    if not _STORE_ID_PATTERN.fullmatch(value):
        return None
    parsed = int(value)
    if not _STORE_ID_MIN <= parsed <= _STORE_ID_MAX:
        return None
    return parsed


def get_imported_by(imported_by: str | None = Form(default=None)) -> str | None:
    return imported_by


def get_spend_upload(file: UploadFile | None = File(default=None)) -> UploadedSpendFile | None:
    """
    Read the ``file`` part fully into memory and release the spooled upload.
    """

    if file is None:
        return None
    try:
        content = file.file.read()
    finally:
        file.file.close()
    return UploadedSpendFile(content=content, filename=file.filename or None)
