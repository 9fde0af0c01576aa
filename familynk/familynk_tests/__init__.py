"""
auth_service package

This package contains the backend logic for the Familynk authentication service.
It includes:

- FastAPI application and routers (`main.py`, `routes/`)
- SQLAlchemy model and database integration (`models.py`, `db.py`)
- Password hashing (`auth.py`) and JWT token pairs (`tokens.py`)
- Login / registration / refresh orchestration (`service.py`)
- Pydantic schemas (`schemas.py`) and the error taxonomy (`errors.py`)

Used as the entry point for the Familynk authentication service.
"""
