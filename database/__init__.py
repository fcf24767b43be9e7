"""
ORM models, engine/session handle and the user record store.
"""
