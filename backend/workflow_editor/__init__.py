"""
Workflow Editor — graph state, undo/redo history and JSON persistence
for a visual workflow builder.
"""

__version__ = "0.1.0"
