# Schemas package init
"""
Portfolio API - Schemas Package
===============================

    - portfolio.py:  request bodies stored in the collections
    - common.py:     acknowledgments, token, error and health responses
"""
