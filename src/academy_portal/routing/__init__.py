"""
academy_portal.routing

Identity-driven navigation.

Responsibilities:
- Push-based identity snapshots (`identity`).
- The pure routing decision (`decisions`).
- The stateful router with stall fallback (`session_router`).
"""

# Package marker.
