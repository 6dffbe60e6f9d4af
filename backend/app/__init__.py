"""
SpeakerDesk Backend — Application Package Initializer
======================================================

Architecture Note:
    ┌─────────────────────────────────────┐
    │  Routes + dependencies (API Layer)  │  ← route table, loader, auth, guard
    ├─────────────────────────────────────┤
    │         Services (CRUD logic)       │  ← payload ↔ entity translation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    app.client holds the HTTP-side mirror of the route table
    (resource proxy + view controller).
"""

__version__ = "1.0.0"
