"""
==============================================================================
API Package
==============================================================================

HTTP surface of the catalog, versioned under /api/v1.

==============================================================================
"""
