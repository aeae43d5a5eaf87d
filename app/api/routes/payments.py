from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.api.deps import get_payment_service
from app.db.session import get_db
from app.schemas.payment import SubmitPaymentRequest, UpdateStatusRequest
from app.services.payment import PaymentService

router = APIRouter()


@router.post("/payment")
async def submit_payment(request: SubmitPaymentRequest,
    payment_service: PaymentService = Depends(get_payment_service),
    db: AsyncSession = Depends(get_db)):
    result = await payment_service.submit_payment(request, db)
    return {"success": True, "message": "Payment saved.", "data": result}


@router.patch("/payment/{payment_id}")
async def update_payment_status(payment_id: int, request: UpdateStatusRequest,
    payment_service: PaymentService = Depends(get_payment_service),
    db: AsyncSession = Depends(get_db)):
    result = await payment_service.update_status(payment_id, request.status, db)
    return {"success": True, "message": "Payment status updated.", "data": result}


@router.get("/payments")
async def list_payments(
    payment_service: PaymentService = Depends(get_payment_service),
    db: AsyncSession = Depends(get_db)):
    payments = await payment_service.list_payments(db)
    return {"success": True, "data": payments}
