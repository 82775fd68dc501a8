"""Users API: JSON-file backed user records over FastAPI.

The ASGI application lives in ``users_api.app`` (``uvicorn users_api.app:app``).
"""
