# Services package init
"""
NoteShare Backend — Services Layer
====================================

What:  Validation and orchestration between routes (HTTP) and repositories
       (persistence). One method per endpoint.
How:   Services receive the `Database` for each call, open one session per
       operation, and raise typed errors from app.exceptions.

Service Inventory:
    - AccountService:  signup, account list, groups of an account
    - GroupService:    groups and memberships
    - NoteService:     sticky notes on group boards
    - SummaryService:  body checks, summarize, stored summaries
    - LLMService (abstract) / GroqService: outbound chat-completion call
    - colors, guards:  shared helpers (color normalization, id checks)
"""
