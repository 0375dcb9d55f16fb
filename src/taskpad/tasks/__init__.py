"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskDraft, TaskChanges, Ok/Err, ErrorKind)
- time_utils.py: dd/mm/yyyy HH:MM parsing/formatting, countdown math
- icons.py: fixed icon catalog (tasks store the index)
- validation.py: ordered rule chain used by add/update
- task_store.py: in-memory observable store (the source of truth)
- task_repo.py: SQLite-backed and in-memory persistence
- due_notifier.py: polling loop that reminds about tasks due soon
- task_api.py: small text-level helpers used by the command layer
"""
