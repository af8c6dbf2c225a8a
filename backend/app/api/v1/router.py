from fastapi import APIRouter
from app.api.v1.endpoints import auth, events, registrations, payments, health, admin

api_router = APIRouter()

# Health checks (use /health/ready for the load balancer)
api_router.include_router(health.router)

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(events.router, prefix="/events", tags=["Events"])
api_router.include_router(registrations.router, prefix="/registrations", tags=["Event Registrations"])
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
