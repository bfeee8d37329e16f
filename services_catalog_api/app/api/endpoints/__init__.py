"""
Endpoint modules.

Each module defines an APIRouter for one area (services, admin
session, payments, uploaded files).  They are aggregated in
``api/router.py``.
"""
