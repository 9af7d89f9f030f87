"""
Snippet Summarizer Backend — Application Package Initializer
=============================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Snippet Service (Orchestration)   │  ← Validation, error classification
    ├──────────────────┬──────────────────┤
    │  Gemini Client   │  Snippet Store   │  ← External AI call / persistence
    ├──────────────────┴──────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes translate HTTP to service calls. The service owns the
    validate → summarize → persist flow and decides which error kind a
    failure becomes. The leaves know nothing about HTTP.
"""

__version__ = "1.0.0"
