from fastapi import APIRouter

from licensedesk.modules.proxy import router as proxy_router

api_router = APIRouter()

api_router.include_router(proxy_router, prefix="/api", tags=["Proxy"])
