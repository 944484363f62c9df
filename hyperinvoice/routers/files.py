"""Serves PDFs written by the local storage backend."""

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from hyperinvoice.config import Settings, StorageBackend, get_settings

router = APIRouter()


@router.get("/files/{key:path}")
def download_file(
    key: str,
    download: bool = False,
    settings: Settings = Depends(get_settings),
):
    if settings.storage_backend is not StorageBackend.LOCAL:
        raise HTTPException(status_code=404, detail="File serving is disabled")

    root = Path(settings.local_storage_path).resolve()
    path = (root / key).resolve()
    if root not in path.parents or not path.is_file():
        raise HTTPException(status_code=404, detail="File not found")

    return FileResponse(
        path,
        media_type="application/pdf",
        filename=path.name,
        content_disposition_type="attachment" if download else "inline",
    )
