"""Export API endpoint."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from interne.api.dependencies import get_current_user, get_now
from interne.database import get_db
from interne.models.user import User
from interne.services.export_service import export_entries, export_filename

router = APIRouter(prefix="/api/v1/export", tags=["export"])


@router.get("")
def export_data(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    """Download the current user's entries as a JSON file."""
    data = export_entries(db, current_user, now)
    return JSONResponse(
        content=data.model_dump(mode="json"),
        headers={"Content-Disposition": f'attachment; filename="{export_filename(now)}"'},
    )
