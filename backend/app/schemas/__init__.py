# Schemas package init
"""
NoteShare Backend — API Schemas
=================================

    common.py   error body, health, storage diagnostics (both services)
    board.py    accounts, groups, memberships, notes
    summary.py  summarizer responses
"""
