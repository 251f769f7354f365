from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard.api.health import router as health_router
from dashboard.api.routes_customers import router as customers_router
from dashboard.api.routes_invoices import router as invoices_router
from dashboard.config import settings
from dashboard.db import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup; RESET_DB=1 in tests/CI forces a clean schema
    init_db()
    yield


app = FastAPI(title="Invoice Dashboard - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(invoices_router, tags=["invoices"])

app.include_router(customers_router, tags=["customers"])
