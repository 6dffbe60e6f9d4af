# Middleware package init
"""
SpeakerDesk Backend — Middleware Package
=========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [Session] → [CORS] → Route Handler

    1. Request ID first: every later log line and error body can use it
    2. Logging: records status and duration once the response comes back
    3. Session: Starlette's SessionMiddleware decodes the signed cookie into
       request.session for the auth dependencies
    4. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)
"""
