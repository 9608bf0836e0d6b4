"""
HTTP API for luhnlab.
"""
