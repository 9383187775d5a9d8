# Routes package init
"""
Portfolio API - API Routes Package
==================================

Route Inventory:
    - projects.py:  GET/POST /projects, GET/PUT/DELETE /projects/{id}
    - skills.py:    GET/POST /skills, DELETE /skills/{id},
                    GET/POST /backendskills
    - contacts.py:  GET/POST /contacts
    - blogs.py:     GET/POST /blogs, GET /blogs/{id}
    - auth.py:      POST /jwt
    - health.py:    GET /, GET /health

Routes stay thin: parse the request, call a service, return its result.
"""
