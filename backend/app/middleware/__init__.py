# Middleware package init
"""
NoteShare Backend — Middleware Package
========================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    - Request ID runs first so every later log line, including the access
      line and error handler logs, can read it from the ContextVar.
    - The X-Request-ID header is set on every response, errors included.
"""
