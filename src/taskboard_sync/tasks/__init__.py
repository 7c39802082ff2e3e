"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskDraft, BoardConfig) and errors
- task_store.py: pure collection operations (create/update/remove/move)
- wire.py: translation to/from the remote sheet's column headers
"""
