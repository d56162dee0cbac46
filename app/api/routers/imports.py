"""
app/api/routers/imports.py

Supplier-spend import HTTP endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_imported_by, get_spend_upload, get_store_id
from app.domain.spend_import import UploadedSpendFile
from app.errors import (
    CSVRowParseError,
    ImportPersistenceError,
    InputMissingError,
    UploadValidationError,
)
from app.schemas.spend_import import ImportResultResponse
from app.services.spend_import_service import SpendImportService, get_spend_import_service

router = APIRouter(prefix="/v1", tags=["imports"])


@router.post(
    "/imports",
    response_model=ImportResultResponse,
    status_code=status.HTTP_201_CREATED,
)
def upload_import(
    store_id: int | None = Depends(get_store_id),
    imported_by: str | None = Depends(get_imported_by),
    file: UploadedSpendFile | None = Depends(get_spend_upload),
    import_service: SpendImportService = Depends(get_spend_import_service),
) -> ImportResultResponse:
    """
    Import one ``date,supplier,amount`` file for a store.

    The whole file is accepted or nothing is stored.
    """

    try:
        result = import_service.import_upload(
            store_id=store_id,
            imported_by=imported_by,
            file=file,
        )
    except (InputMissingError, UploadValidationError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.message,
        ) from exc
    except CSVRowParseError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"invalid csv: {exc.message}",
        ) from exc
    except ImportPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    return ImportResultResponse.from_result(result)
