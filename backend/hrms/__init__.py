"""
HRMS Backend — Application Package Initializer
================================================

What: Marks the `hrms` directory as a Python package.
Who:  Imported by uvicorn (`hrms.main:app`), pytest, and the `hrms` console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Error Translation)   │  ← id parsing, driver errors → app errors
    ├─────────────────────────────────────┤
    │    Employee Store (Persistence)     │  ← one MongoDB call per operation
    ├─────────────────────────────────────┤
    │     Database (Connection Bootstrap) │  ← single AsyncMongoClient per process
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
