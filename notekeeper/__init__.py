"""
Notekeeper.

Client for a remote collection of short text notes.

- core/: Configuration, logging and exceptions
- client/: Notes Store HTTP client (httpx)
- schemas/: Note schemas (pydantic)
- session/: Note-session state machine (state, reducer, filter, runtime)
- tui/: Terminal interface (textual)
"""

__version__ = "0.1.0"
