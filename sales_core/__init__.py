"""
Sales order domain core.

Immutable Order aggregate with line merging by product/discount key, and
stateless aggregation queries over order collections.
"""
