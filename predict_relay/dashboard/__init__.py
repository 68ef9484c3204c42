"""
Dashboard backend.
"""
