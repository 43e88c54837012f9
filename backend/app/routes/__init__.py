# Routes package init
"""
Quillnote Backend - API Routes Package
========================================

Route Inventory:
    - notes.py:      GET    /api/notes            (list caller's notes)
                     POST   /api/notes            (create)
                     GET    /api/notes/{id}       (read)
                     PUT    /api/notes/{id}       (update)
                     DELETE /api/notes/{id}       (delete)
    - summarize.py:  POST   /api/summarize        (AI summary of a note)
    - health.py:     GET    /health               (service health check)

Routes stay thin: extract request data, call a service, set status and
headers. Business rules live in app/services.
"""
