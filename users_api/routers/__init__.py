"""
FastAPI routers grouped by domain.

Each module exposes an APIRouter that the application (app.py) includes.
Routers translate HTTP payloads into service calls and error kinds into status
codes; they hold no business rules.
"""
