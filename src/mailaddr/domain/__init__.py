"""
Domain layer for mail address handling.

This layer contains:
- Data models (error taxonomy, result types)
- Business logic (recipient resolution pipeline)
"""
