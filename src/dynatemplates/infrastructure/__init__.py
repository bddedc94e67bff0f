"""Infrastructure layer - External dependencies and implementations.

This layer contains:
- Template engines and language processors
- Database adapters (SQLAlchemy)
- API routes (FastAPI)
"""
