# utils / clipping.py

# -----
# Clamps Box Coordinates to an Image Window.
# y1, y2 -> [window.y1, window.y2], x1, x2 -> [window.x1, window.x2].
# No Reordering After Clamping, an Inverted Window Gives Inverted Boxes.
# -----

# Imports.
from typing import NamedTuple
import torch

# Window Class.
class Window(NamedTuple):
    """Clamping Boundary in (y1, x1, y2, x2) Form."""
    y1: float
    x1: float
    y2: float
    x2: float

    @classmethod
    def from_any(cls, window):
        """Build a Window From a Window, a 4-Sequence or a [4] Tensor."""
        if isinstance(window, cls):
            return window
        if isinstance(window, torch.Tensor):
            window = window.tolist()
        return cls(*[float(v) for v in window])

# ----------------------------------------------------------------------------

# Clip Boxes Function.
def clip_boxes(boxes, window):
    """
    Clip Boxes to Window, Returning a New Tensor.

    Args:
        boxes (torch.Tensor):   [N, 4] Boxes (y1, x1, y2, x2).
        window:                 Window, 4-Sequence or [4] Tensor (y1, x1, y2, x2).

    Returns:
        torch.Tensor: [N, 4] Clipped Boxes. Input is Left Unmodified.
    """
    window = Window.from_any(window)
    return torch.stack([
        boxes[:, 0].clamp(window.y1, window.y2),
        boxes[:, 1].clamp(window.x1, window.x2),
        boxes[:, 2].clamp(window.y1, window.y2),
        boxes[:, 3].clamp(window.x1, window.x2),
    ], dim=1)

# ----------------------------------------------------------------------------

# Clip to Window Function.
def clip_to_window(boxes, window):
    """
    Clip Boxes to Window in Place.

    Window Bounds are Floats, so boxes Must Be a Floating Point Tensor. An
    Integer Tensor Can't Hold the Result and torch Raises a RuntimeError,
    While clip_boxes Returns a New Floating Point Tensor for the Same Input.

    Args:
        boxes (torch.Tensor):   [N, 4] Boxes, Modified in Place.
        window:                 Window, 4-Sequence or [4] Tensor (y1, x1, y2, x2).

    Returns:
        torch.Tensor: The Same boxes Tensor.
    """
    window = Window.from_any(window)
    boxes[:, 0].clamp_(window.y1, window.y2)  # y1
    boxes[:, 1].clamp_(window.x1, window.x2)  # x1
    boxes[:, 2].clamp_(window.y1, window.y2)  # y2
    boxes[:, 3].clamp_(window.x1, window.x2)  # x2
    return boxes
