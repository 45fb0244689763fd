"""
Land Registry - authoritative parcel registry with role-based access control.

Tracks land parcels through registration, agent verification and ownership
transfer, collecting a one-time registration fee on behalf of the administrator.
"""

__version__ = "0.1.0"

__all__ = []
