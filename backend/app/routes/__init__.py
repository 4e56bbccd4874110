# Routes package init
"""
NoteShare Backend — API Routes Package
========================================

Route Inventory (board service):
    - accounts.py:  /api/accounts, /api/accounts/{id}/groups
    - groups.py:    /api/groups, /api/groups/{id}/users, /api/groups/{id}/notes
    - notes.py:     /api/notes/{id}, /api/notes/{id}/position
    - debug.py:     /api/debug

Route Inventory (summarizer service):
    - summaries.py: /api/summarize, /api/summaries, /api/summaries/{id}
    - debug.py:     /api/debug

Both services:
    - health.py:    /health

Routes stay thin: read the request, call one service method, shape the
response. Business rules live in app.services.
"""
