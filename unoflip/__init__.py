"""UNO Flip game engine with undo/redo, saves and computer players."""

__version__ = "0.1.0"
