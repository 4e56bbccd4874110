"""
NoteShare Backend — Application Package
=========================================

Two small services share this package:

    board       accounts, groups with roles, sticky notes shared into groups
    summarizer  text in, short bullet summary out (via an LLM API), stored

Layers:

    ┌─────────────────────────────────────┐
    │     Routes + main (HTTP layer)      │  ← status codes, headers, wiring
    ├─────────────────────────────────────┤
    │      Services (validation and       │  ← error codes, defaults, colors,
    │      orchestration, LLM client)     │    one session per operation
    ├─────────────────────────────────────┤
    │   Repositories + Models + Schemas   │  ← SQL per operation, ORM, API
    ├─────────────────────────────────────┤
    │      Database (engine, sessions)    │  ← one per service
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
