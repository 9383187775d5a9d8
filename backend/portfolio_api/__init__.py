"""
Portfolio API - Application Package
===================================

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, auth dependency
    ├─────────────────────────────────────┤
    │         Services                    │  ← one document operation each
    ├─────────────────────────────────────┤
    │         Schemas                     │  ← Pydantic request/response models
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← shared motor client handle
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
