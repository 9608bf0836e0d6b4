"""
Plan resolution and quota enforcement.
"""
