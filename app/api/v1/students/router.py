"""Admin student routes: list, create, read, update, delete."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import require_admin
from app.auth.schemas import UserInfo
from app.core.exceptions import ServiceError
from app.core.schemas import DataResponse, ListResponse, MessageResponse
from app.db.session import get_db

from .schemas import StudentCreate, StudentUpdate
from . import service

router = APIRouter(
    prefix="/api/admin/students",
    tags=["admin: students"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=ListResponse[UserInfo])
async def list_students(db: AsyncSession = Depends(get_db)) -> ListResponse[UserInfo]:
    return ListResponse[UserInfo].of(await service.list_students(db))


@router.post(
    "",
    response_model=DataResponse[UserInfo],
    status_code=status.HTTP_201_CREATED,
)
async def create_student(
    payload: StudentCreate,
    db: AsyncSession = Depends(get_db),
) -> DataResponse[UserInfo]:
    try:
        return DataResponse[UserInfo](data=await service.create_student(db, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{student_id}", response_model=DataResponse[UserInfo])
async def get_student(
    student_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> DataResponse[UserInfo]:
    try:
        return DataResponse[UserInfo](data=await service.get_student(db, student_id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{student_id}", response_model=DataResponse[UserInfo])
async def update_student(
    student_id: UUID,
    payload: StudentUpdate,
    db: AsyncSession = Depends(get_db),
) -> DataResponse[UserInfo]:
    try:
        return DataResponse[UserInfo](data=await service.update_student(db, student_id, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{student_id}", response_model=MessageResponse)
async def delete_student(
    student_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    try:
        await service.delete_student(db, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageResponse()
