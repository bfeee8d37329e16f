"""
Service layer.

Storage (``record_store``, ``asset_store``), background cleanup
(``reconciler``) and the business logic used by the API handlers
(``catalog_service``, ``auth_service``, ``payment_service``).
"""
