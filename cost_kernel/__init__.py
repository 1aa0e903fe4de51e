"""
Cost Kernel - shared infrastructure for the MegaCost cost tracker.

Provides:
- Structured JSON logging with request-scoped context
- Typed exception hierarchy with machine-readable codes
- Injectable clock for deterministic date arithmetic
- SQLAlchemy declarative base and engine/session management
"""

__version__ = "0.1.0"
