"""
Quillnote Backend - Application Package
=========================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Auth (session) + Services (logic)  │  ← access gate, CRUD, summaries
    ├─────────────────────────────────────┤
    │   Provider adapters (OpenAI/Gemini) │  ← one outbound call each
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
