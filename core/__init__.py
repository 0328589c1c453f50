"""
Core definitions shared across the gateway layers (error taxonomy).
"""
