"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskState)
- task_store.py: in-memory, lock-guarded storage with lifecycle checks
- exceptions.py: failures raised by the store
"""
