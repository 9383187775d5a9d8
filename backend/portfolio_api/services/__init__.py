# Services package init
"""
Portfolio API - Services Layer
==============================

Service Inventory:
    - DocumentService: CRUD over one collection (one instance per collection)
    - TokenService: JWT issuance and verification
"""
