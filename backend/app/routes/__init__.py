# Routes package init
"""
SpeakerDesk Backend — API Routes Package
=========================================

Route Inventory:
    - speakers.py: GET/POST /speakers, GET/PUT/DELETE /speakers/{id}
    - auth.py:     POST /auth/signup, POST /auth/signin, GET /auth/signout, GET /users/me
    - health.py:   GET /health

Routes are THIN: they declare the dependency chain and hand off to a service.
"""
