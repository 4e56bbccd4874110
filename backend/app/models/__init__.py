# Importing this package registers every table with Base.metadata
from app.models.account import Account
from app.models.group import Group, GroupUser, Role
from app.models.note import Note, NoteShare
from app.models.summary import Summary

__all__ = ["Account", "Group", "GroupUser", "Role", "Note", "NoteShare", "Summary"]
