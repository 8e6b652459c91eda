"""Service layer: order transitions, ATM assignment, order tracking.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
