"""
==============================================================================
Product Catalog Service
==============================================================================

Read-only product catalog with lookup and search, fed from an external
product feed.

==============================================================================
"""

__version__ = "1.0.0"
