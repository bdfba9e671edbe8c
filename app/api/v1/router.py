# app/api/v1/router.py
from fastapi import APIRouter

from app.modules.transactions.router import router as transactions_router

# Main API router
api_router = APIRouter()

api_router.include_router(
    transactions_router,
    tags=["Transactions"]
)
