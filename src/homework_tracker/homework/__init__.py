"""
Homework subsystem.

Components:
- models.py: data structures (HomeworkItem, HomeworkFormData, Subject)
- validation.py: form rules (title/subject/due date) and normalization
- codec.py: JSON snapshot (de)serialization with dueDate/createdAt revival
- seed.py: example items for first run
- task_store.py: in-memory collection persisted to a key-value store
"""
