"""Notebook session tying the page store to persistence and backups."""

from .session import NotebookSession, PagePatch

__all__ = ['NotebookSession', 'PagePatch']
