"""
Task subsystem.

Components:
- task_models.py: data structures (Task)
- task_store.py: SQLite-backed storage for task records
- normalizer.py: decides the effective stored date of a candidate task
- task_service.py: lifecycle operations (create/read/update/complete/delete/list)
"""
