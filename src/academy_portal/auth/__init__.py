"""
academy_portal.auth

Identity package.

Responsibilities:
- Decode identity-provider access tokens (JWT).
- Resolve the current visitor's identity for FastAPI endpoints.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The identity provider owns sessions; this package only reads the tokens it issues.
