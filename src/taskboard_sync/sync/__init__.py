"""
Persistence subsystem.

Components:
- gateway.py: HTTP gateway to the remote store (fetch all / replace all)
- sync_controller.py: debounced, coalescing write scheduler
"""
