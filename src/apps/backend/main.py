# src/apps/backend/main.py

from fastapi import FastAPI

from apps.backend.api.availability import router as availability_router
from apps.backend.api.boms import router as boms_router
from apps.backend.api.inventory import router as inventory_router
from apps.backend.api.items import router as items_router
from apps.backend.api.work_orders import router as work_orders_router

app = FastAPI(
    title="Craftify MRP API",
    description="BOM explosion, FEFO lot allocation and work order planning",
    version="0.1.0"
)

app.include_router(items_router, prefix="/items")
app.include_router(boms_router, prefix="/boms")
app.include_router(inventory_router, prefix="/inventory")
app.include_router(availability_router, prefix="/availability")
app.include_router(work_orders_router, prefix="/work-orders")


@app.get("/")
def root():
    return {
        "status": "ok",
        "service": "Craftify MRP API",
        "version": "0.1.0"
    }
