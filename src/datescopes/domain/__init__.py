"""Domain layer — periods, intervals, and calendar arithmetic.

This layer depends only on stdlib and python-dateutil.
It must never import from services, infrastructure, or config.
"""
