"""HTTP layer: routers for the public and admin endpoints."""
