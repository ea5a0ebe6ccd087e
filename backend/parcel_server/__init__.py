"""
Parcel Server — Application Package
====================================

Backend for a parcel delivery service: customers book and pay for parcels,
admins approve riders and assign them, riders report delivery progress.

Layers:

    ┌─────────────────────────────────────┐
    │  Routes + auth dependencies (HTTP)  │  ← status codes, caller resolution
    ├─────────────────────────────────────┤
    │  Services (business rules)          │  ← ownership, side effects
    ├─────────────────────────────────────┤
    │  Document store adapter             │  ← find / insert / update / delete
    ├─────────────────────────────────────┤
    │  Models (SQLAlchemy) + Schemas      │  ← persistence and API contracts
    └─────────────────────────────────────┘

External providers (identity verification, card payments) sit behind
abstract interfaces in services/provider_base.py.
"""

__version__ = "1.0.0"
