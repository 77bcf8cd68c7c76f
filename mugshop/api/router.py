"""
API Router - JSON Endpoints
"""
from fastapi import APIRouter
from datetime import datetime

from mugshop.api.auth import router as auth_router
from mugshop.api.products import router as products_router
from mugshop.api.stock import router as stock_router
from mugshop.api.orders import router as orders_router
from mugshop.api.designs import router as designs_router

api_router = APIRouter(tags=["API"])

# Include sub-routers
api_router.include_router(auth_router)
api_router.include_router(products_router)
api_router.include_router(stock_router)
api_router.include_router(orders_router)
api_router.include_router(designs_router)

# ===================== HEALTH & STATUS =====================

@api_router.get("/status")
async def api_status():
    return {"status": "ok", "version": "1.0.0", "timestamp": datetime.now().isoformat()}
