"""
Land Registry Bridge Module.

Failure-isolated queries against peer registry instances.
"""

__all__ = [
    "ExternalQueryBridge",
    "RegistryPeer",
]

from land_registry.bridge.query import ExternalQueryBridge, RegistryPeer
