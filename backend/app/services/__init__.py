# Services package init
"""
SpeakerDesk Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
Why:   Routes handle HTTP, services handle store access and payload translation.
How:   Services accept a session plus domain objects and return response schemas.

Service Inventory:
    - SpeakerService: Speaker CRUD + list, and the by-id lookup used by the loader
    - UserService: local sign-up and credential checks
"""
