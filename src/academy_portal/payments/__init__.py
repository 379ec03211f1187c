"""
academy_portal.payments

Payment boundary.

Responsibilities:
- Decide whether payment capability is configured (`config_gate`).
- Talk to the payment processor behind a narrow interface (`processor`).
- Verify completed checkouts server-side (`verifier`) and start new ones (`checkout`).
"""

# Package marker.
