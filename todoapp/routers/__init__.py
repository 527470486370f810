"""
FastAPI routers.

Each file inside this package exposes an APIRouter that is included in the
main application (app.py). Routers only translate HTTP to ItemStore calls.
"""
