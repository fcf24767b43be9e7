"""
auth — User authentication module.

Provides:
  • Password hashing (bcrypt)
  • JWT token issuance & validation (HS256)
  • Account flow: register / login / profile
  • ``require_identity`` FastAPI dependency gating protected routes
"""
