"""
PanelProxy Backend - Application Package Initializer
=====================================================

What: Marks the `app` directory as a Python package.
Who:  Used by uvicorn (`uvicorn app.main:app`), pytest, and the bundled client.

Architecture Note:
    The backend is a thin, stateless proxy laid out in layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP surface only
    ├─────────────────────────────────────┤
    │   Services (Pipeline + Upstreams)   │  ← License guard, validation, forwarding
    ├─────────────────────────────────────┤
    │          Schemas (Contracts)        │  ← Pydantic request/response models
    └─────────────────────────────────────┘

    There is no persistence layer. Every request is validated, forwarded to
    Gemini or YouTube with a server-held key, and reshaped for the client.
"""

__version__ = "1.0.0"
