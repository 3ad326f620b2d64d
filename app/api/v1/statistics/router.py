from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import require_admin
from app.core.schemas import DataResponse
from app.db.session import get_db

from .schemas import StatisticsResponse
from . import service

router = APIRouter(prefix="/api/admin", tags=["admin: statistics"])


@router.get(
    "/statistics",
    response_model=DataResponse[StatisticsResponse],
    dependencies=[Depends(require_admin)],
)
async def get_statistics(db: AsyncSession = Depends(get_db)) -> DataResponse[StatisticsResponse]:
    return DataResponse[StatisticsResponse](data=await service.get_statistics(db))
