"""
Top‑level router.

Routes are mounted at the root because the catalog frontend calls
``/services``, ``/admin/...`` and ``/create-payment`` directly.
"""

from fastapi import APIRouter

from .endpoints import admin, payments, services, uploads

router = APIRouter()

router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(payments.router, tags=["payments"])
router.include_router(uploads.router, prefix="/uploads", tags=["uploads"])
