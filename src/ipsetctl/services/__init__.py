"""Service layer — mutation cycle, retry controller, ServiceResult adapters.

Services may import from domain and infrastructure layers.
They must never import from commands, config, or output.
"""
