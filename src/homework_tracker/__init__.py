"""
Homework tracker.

Packages:
- homework/: items, validation, snapshot codec and the task store
- storage/: durable key-value backends (SQLite, in-memory)
- core/: ports and shared application state
- cli/, connectors/: console front-end (slash commands + REPL)
"""
