"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskList) and their JSON codec
- task_store.py: file-backed store with atomic claim
- task_api.py: task_list action adapter (schema + execute)
- task_worker.py: polling worker that claims and runs pending tasks
"""
