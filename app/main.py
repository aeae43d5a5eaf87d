from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.routes import pricing, razorpay, payments, health
from app.core.config import settings
from app.db.session import init_db, close_db, AsyncSessionLocal
from app.external.razorpay import RazorpayService
from app.handlers.exception_handlers import init_exception_handlers
from app.services.pricing import PricingService
import logging
from app.core.logging_config import setup_logging
setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(title="Checkout Pricing & Payments API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

#init exception handlers
init_exception_handlers(app)
app.include_router(pricing.router, prefix="/api/pricing", tags=["Pricing"])
app.include_router(razorpay.router, prefix="/api/razorpay", tags=["Razorpay"])
app.include_router(payments.router, prefix="/api", tags=["Payments"])
app.include_router(health.router, prefix="/health", tags=["Health"])


@app.on_event("startup")
async def startup():
    try:
        await init_db()
        async with AsyncSessionLocal() as db:
            await PricingService().ensure_default_pricing(db)
    except Exception:
        # refuse to serve with an unready store
        logger.exception("failed to prepare the database, shutting down")
        raise
    app.state.razorpay = RazorpayService()
    logger.info("startup complete")


@app.on_event("shutdown")
async def shutdown():
    gateway = getattr(app.state, "razorpay", None)
    if gateway is not None:
        await gateway.aclose()
    await close_db()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
