"""
NoteShare Backend — Debug Route Handlers
==========================================

What:  GET /api/debug for each service: where the database file lives,
       whether it exists, its size, and a row count. The summarizer also
       reports the model name and whether an API key is set (never the key).
"""

from fastapi import APIRouter, Depends

from app.database import Database, get_board_db, get_summary_db
from app.schemas.board import BoardDebugInfo
from app.schemas.summary import SummaryDebugInfo
from app.services.note_service import note_service
from app.services.summary_service import summary_service

board_router = APIRouter(prefix="/api", tags=["Debug"])
summarizer_router = APIRouter(prefix="/api", tags=["Debug"])


@board_router.get("/debug", response_model=BoardDebugInfo, summary="Board storage diagnostics")
async def board_debug(db: Database = Depends(get_board_db)) -> BoardDebugInfo:
    return BoardDebugInfo(**await note_service.debug_info(db=db))


@summarizer_router.get(
    "/debug",
    response_model=SummaryDebugInfo,
    summary="Summarizer storage and model diagnostics",
)
async def summarizer_debug(db: Database = Depends(get_summary_db)) -> SummaryDebugInfo:
    return SummaryDebugInfo(**await summary_service.debug_info(db=db))
