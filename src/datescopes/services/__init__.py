"""Service layer — window computation and named scopes.

Services may import from domain and infrastructure layers.
They must never import from config except through ``from_settings``.
"""
