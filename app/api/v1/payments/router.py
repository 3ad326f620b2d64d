"""Admin payment routes: payment ledger, counter payments, receipts."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.rbac import require_admin
from app.auth.schemas import CurrentUser
from app.core.exceptions import ServiceError
from app.core.schemas import DataResponse, ListResponse
from app.db.session import get_db

from .schemas import PaymentCreate, PaymentResponse, PaymentWithStudentAndFee, ReceiptResponse
from . import service

router = APIRouter(prefix="/api/admin", tags=["admin: payments"])


@router.get(
    "/payments",
    response_model=ListResponse[PaymentWithStudentAndFee],
    dependencies=[Depends(require_admin)],
)
async def list_payments(db: AsyncSession = Depends(get_db)) -> ListResponse[PaymentWithStudentAndFee]:
    return ListResponse[PaymentWithStudentAndFee].of(await service.list_all_payments(db))


@router.post(
    "/fees/{fee_id}/payments",
    response_model=DataResponse[PaymentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def record_counter_payment(
    fee_id: UUID,
    payload: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
) -> DataResponse[PaymentResponse]:
    """Record a payment taken by the office on behalf of the fee's student."""
    try:
        payment = await service.pay_fee_as_admin(db, fee_id, payload, recorded_by=current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return DataResponse[PaymentResponse](data=payment)


@router.get(
    "/payments/{payment_id}/receipt",
    response_model=DataResponse[ReceiptResponse],
    dependencies=[Depends(require_admin)],
)
async def get_receipt(
    payment_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> DataResponse[ReceiptResponse]:
    try:
        return DataResponse[ReceiptResponse](data=await service.get_receipt(db, payment_id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
