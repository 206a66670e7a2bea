"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import trips, participants, expenses, balances

api_router = APIRouter()

# Include all route modules
api_router.include_router(trips.router)
api_router.include_router(participants.router)
api_router.include_router(expenses.router)
api_router.include_router(balances.router)
