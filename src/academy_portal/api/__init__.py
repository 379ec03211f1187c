"""
academy_portal.api

HTTP layer (FastAPI).

Responsibilities:
- App factory, dependency wiring, error handlers and routers.
"""

# Package marker.
