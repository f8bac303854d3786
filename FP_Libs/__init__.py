"""
FP_Libs - Fairplay Library Modules

This package contains the core functionality of the Fairplay image editor,
organized into specialized sub-packages:

- ImageEditingLib: Pixel buffers, filter kernels, histogram and image codec
- ModifiersLib: Modifier data model, kernel registry and pipeline engine
- HistoryLib: Edit session, undoable actions and history stack
"""

__version__ = "0.1.0"
