from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import get_db
from app.schemas import result as result_schema
from app.services import grading_service

router = APIRouter(prefix="/results", tags=["results"])


@router.get(
    "/{result_token}",
    response_model=result_schema.ResultResponse | result_schema.PendingDisclosureResponse,
)
async def get_result(
    result_token: str,
    db: AsyncSession = Depends(get_db),
):
    """결과 조회 API (세션 종료 전에는 open_after만 응답)"""
    return await grading_service.get_result(db, result_token)
