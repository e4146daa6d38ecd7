"""
The VIEW layer: PySide6 widgets. Reads the ProjectState, never computes geometry itself.
"""
