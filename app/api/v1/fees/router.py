"""Admin fee routes: assign a fee to a student, list, read, update, delete."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import require_admin
from app.auth.schemas import CurrentUser
from app.core.enums import FeeStatus, FeeType
from app.core.exceptions import ServiceError
from app.core.schemas import DataResponse, ListResponse, MessageResponse
from app.db.session import get_db

from .schemas import FeeCreate, FeeDetail, FeeResponse, FeeUpdate, FeeWithStudent
from . import service

router = APIRouter(prefix="/api/admin", tags=["admin: fees"])


@router.post(
    "/students/{student_id}/fees",
    response_model=DataResponse[FeeResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_fee(
    student_id: UUID,
    payload: FeeCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
) -> DataResponse[FeeResponse]:
    try:
        fee = await service.create_fee(db, student_id, payload, created_by=current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return DataResponse[FeeResponse](data=fee)


@router.get(
    "/fees",
    response_model=ListResponse[FeeWithStudent],
    dependencies=[Depends(require_admin)],
)
async def list_fees(
    fee_status: Optional[FeeStatus] = Query(None, alias="status", description="Filter by status: pending, partial, paid"),
    fee_type: Optional[FeeType] = Query(None, alias="feeType"),
    student_id: Optional[UUID] = Query(None, alias="studentId"),
    db: AsyncSession = Depends(get_db),
) -> ListResponse[FeeWithStudent]:
    fees = await service.list_fees(db, status_filter=fee_status, fee_type=fee_type, student_id=student_id)
    return ListResponse[FeeWithStudent].of(fees)


@router.get(
    "/fees/{fee_id}",
    response_model=DataResponse[FeeDetail],
    dependencies=[Depends(require_admin)],
)
async def get_fee(
    fee_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> DataResponse[FeeDetail]:
    try:
        return DataResponse[FeeDetail](data=await service.get_fee_detail(db, fee_id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put(
    "/fees/{fee_id}",
    response_model=DataResponse[FeeResponse],
    dependencies=[Depends(require_admin)],
)
async def update_fee(
    fee_id: UUID,
    payload: FeeUpdate,
    db: AsyncSession = Depends(get_db),
) -> DataResponse[FeeResponse]:
    try:
        return DataResponse[FeeResponse](data=await service.update_fee(db, fee_id, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete(
    "/fees/{fee_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_fee(
    fee_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    try:
        await service.delete_fee(db, fee_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageResponse()
