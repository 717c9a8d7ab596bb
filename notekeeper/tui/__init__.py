"""
Terminal Interface.

Textual app rendering a NoteSession: search box, note list, editor and
delete-confirmation modals.
"""
