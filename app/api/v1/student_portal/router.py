"""Student self-service routes: profile, own fees, paying a fee, payment history, receipts."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.fees import service as fees_service
from app.api.v1.fees.schemas import FeeResponse
from app.api.v1.payments import service as payments_service
from app.api.v1.payments.schemas import PaymentCreate, PaymentResponse, PaymentWithFee, ReceiptResponse
from app.api.v1.students import service as students_service
from app.api.v1.students.schemas import ProfileUpdate
from app.auth.rbac import require_student
from app.auth.schemas import CurrentUser, UserInfo
from app.core.exceptions import ServiceError
from app.core.schemas import DataResponse, ListResponse
from app.db.session import get_db

router = APIRouter(prefix="/api/student", tags=["student"])


# --- Profile ---
@router.get("/profile", response_model=DataResponse[UserInfo])
async def get_profile(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_student),
) -> DataResponse[UserInfo]:
    try:
        return DataResponse[UserInfo](data=await students_service.get_student(db, current_user.id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/profile", response_model=DataResponse[UserInfo])
async def update_profile(
    payload: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_student),
) -> DataResponse[UserInfo]:
    try:
        return DataResponse[UserInfo](data=await students_service.update_profile(db, current_user.id, payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


# --- Fees ---
@router.get("/fees", response_model=ListResponse[FeeResponse])
async def list_my_fees(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_student),
) -> ListResponse[FeeResponse]:
    return ListResponse[FeeResponse].of(await fees_service.list_student_fees(db, current_user.id))


@router.get("/fees/{fee_id}", response_model=DataResponse[FeeResponse])
async def get_my_fee(
    fee_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_student),
) -> DataResponse[FeeResponse]:
    try:
        return DataResponse[FeeResponse](data=await fees_service.get_student_fee(db, current_user.id, fee_id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/fees/{fee_id}/pay",
    response_model=DataResponse[PaymentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def pay_fee(
    fee_id: UUID,
    payload: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_student),
) -> DataResponse[PaymentResponse]:
    try:
        payment = await payments_service.pay_fee_as_student(db, current_user.id, fee_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return DataResponse[PaymentResponse](data=payment)


# --- Payments ---
@router.get("/payments", response_model=ListResponse[PaymentWithFee])
async def list_my_payments(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_student),
) -> ListResponse[PaymentWithFee]:
    return ListResponse[PaymentWithFee].of(await payments_service.list_student_payments(db, current_user.id))


@router.get("/payments/{payment_id}/receipt", response_model=DataResponse[ReceiptResponse])
async def get_my_receipt(
    payment_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_student),
) -> DataResponse[ReceiptResponse]:
    try:
        receipt = await payments_service.get_receipt_for_student(db, current_user.id, payment_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return DataResponse[ReceiptResponse](data=receipt)
