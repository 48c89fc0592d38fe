# api/v1/router.py
from fastapi import APIRouter

from . import metrics, plans, profiles, units

api_router = APIRouter()

api_router.include_router(units.router, prefix="/units", tags=["Units"])
api_router.include_router(metrics.router, prefix="/metrics", tags=["Metrics"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])
api_router.include_router(plans.router, prefix="/plans", tags=["Plans"])
