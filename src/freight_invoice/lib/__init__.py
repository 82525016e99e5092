"""
Local library modules shared across the invoice editor.

Modules:
    logs: Logging utilities
    paths: Data directory resolution
    caches: Disk-backed storage slot (diskcache)
    clients: Google Gen AI client factory
"""

from freight_invoice.lib import caches, clients, logs, paths

__all__ = ["caches", "clients", "logs", "paths"]
