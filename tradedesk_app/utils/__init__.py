"""
Utility functions module.

Time Semantics:
- All quote and valuation timestamps are timezone-aware UTC datetimes
- Serialization to the HTTP layer uses ISO-8601 strings
"""
