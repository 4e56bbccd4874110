"""
NoteShare Backend — Repositories (Storage Access Layer)
=========================================================

What:  One class per aggregate; one coroutine per query or mutation.
How:   Every method receives an open `AsyncSession` from `Database.session()`.
       A method that performs several statements (group + owner membership,
       note + share, clear-group) runs them in the caller's single session,
       so they commit or roll back together.

Repositories never open sessions and never commit; services own the
transaction boundary. Driver errors surface as `DatabaseError` from
`Database.session()`.
"""

from app.repositories.account_repo import AccountRepository, account_repository
from app.repositories.group_repo import GroupRepository, group_repository
from app.repositories.note_repo import NoteRepository, note_repository
from app.repositories.summary_repo import SummaryRepository, summary_repository

__all__ = [
    "AccountRepository",
    "GroupRepository",
    "NoteRepository",
    "SummaryRepository",
    "account_repository",
    "group_repository",
    "note_repository",
    "summary_repository",
]
