from fastapi import APIRouter, Depends
from app.api.deps import get_payment_service
from app.schemas.payment import CreateOrderRequest, CreateOrderResponse
from app.services.payment import PaymentService

router = APIRouter()


@router.post("/order", response_model=CreateOrderResponse)
async def create_order(request: CreateOrderRequest,
    payment_service: PaymentService = Depends(get_payment_service)):
    order_id = await payment_service.create_order(request.amount, request.currency)
    return CreateOrderResponse(orderId=order_id)
