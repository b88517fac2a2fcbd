from fastapi import APIRouter
from app.api.v1.endpoints import applications, documents, admin, payments, support, settings

api_router = APIRouter()
api_router.include_router(applications.router, prefix="/applications", tags=["applications"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(payments.router, prefix="/payments", tags=["payments"])
api_router.include_router(support.router, prefix="/support", tags=["support"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
