"""
ERP Kernel - shared primitives for the aggregation and classification layer.

- Structured JSON logging with request-scoped context
- Typed exceptions with machine-readable codes
- Injectable clock and day-granularity date helpers
- Read-only SQLAlchemy access to the operational tables
"""

__version__ = "0.1.0"
