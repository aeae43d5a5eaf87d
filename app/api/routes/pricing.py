from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.api.deps import get_pricing_service
from app.db.session import get_db
from app.schemas.pricing import UpdatePricingRequest
from app.services.pricing import PricingService

router = APIRouter()


@router.get("")
async def get_pricing(
    pricing_service: PricingService = Depends(get_pricing_service),
    db: AsyncSession = Depends(get_db)):
    pricing = await pricing_service.get_pricing(db)
    return {"success": True, "data": pricing}


@router.post("")
async def update_pricing(request: UpdatePricingRequest,
    pricing_service: PricingService = Depends(get_pricing_service),
    db: AsyncSession = Depends(get_db)):
    pricing = await pricing_service.update_pricing(request.basePrice, request.discountPercentage, db)
    return {"success": True, "message": "Pricing updated.", "data": pricing}
