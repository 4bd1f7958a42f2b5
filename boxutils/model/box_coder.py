# model / box_coder.py

# -----

# Converts Between Boxes & Regression Deltas.
# Boxes are (y1, x1, y2, x2), Deltas are (dy, dx, dh, dw).
# dy, dx -> Center Offsets Normalized by Source Height / Width.
# dh, dw -> Log-Ratios of Target to Source Height / Width.

# -----

# Imports.
import torch

# Box Geometry Helper.
def _center_size(boxes):
    """Split [N, 4] Boxes Into Center Y, Center X, Height, Width."""
    height = boxes[:, 2] - boxes[:, 0]
    width = boxes[:, 3] - boxes[:, 1]
    center_y = boxes[:, 0] + 0.5 * height
    center_x = boxes[:, 1] + 0.5 * width
    return center_y, center_x, height, width

# ----------------------------------------------------------------------------

# Box Refinement Function.
def box_refinement(boxes, gt_boxes):
    """
    Compute Refinement Needed to Transform boxes Into gt_boxes.

    Args:
        boxes (torch.Tensor):       [N, 4] Source Boxes, Positive Height & Width.
        gt_boxes (torch.Tensor):    [N, 4] Ground Truth Boxes, Matched by Row.

    Returns:
        torch.Tensor: [N, 4] Deltas (dy, dx, dh, dw).
    """

    # Get Source Boxes.
    center_y, center_x, height, width = _center_size(boxes)

    # Get Ground Truth Boxes.
    gt_center_y, gt_center_x, gt_height, gt_width = _center_size(gt_boxes)

    # Compute Deltas.
    dy = (gt_center_y - center_y) / height
    dx = (gt_center_x - center_x) / width
    dh = torch.log(gt_height / height)
    dw = torch.log(gt_width / width)

    return torch.stack([dy, dx, dh, dw], dim=1)

# ----------------------------------------------------------------------------

# Apply Box Deltas Function.
def apply_box_deltas(boxes, deltas):
    """
    Apply Deltas to Boxes. Inverse of box_refinement.

    Args:
        boxes (torch.Tensor):   [N, 4] Boxes (y1, x1, y2, x2).
        deltas (torch.Tensor):  [N, 4] Deltas (dy, dx, dh, dw).

    Returns:
        torch.Tensor: [N, 4] Refined Boxes (y1, x1, y2, x2).
    """

    # Convert to y, x, h, w.
    center_y, center_x, height, width = _center_size(boxes)

    # Apply Deltas.
    center_y = center_y + deltas[:, 0] * height
    center_x = center_x + deltas[:, 1] * width
    height = height * torch.exp(deltas[:, 2])
    width = width * torch.exp(deltas[:, 3])

    # Convert Back to y1, x1, y2, x2.
    y1 = center_y - 0.5 * height
    x1 = center_x - 0.5 * width
    y2 = y1 + height
    x2 = x1 + width

    return torch.stack([y1, x1, y2, x2], dim=1)

# ----------------------------------------------------------------------------

# Box Coder Class.
class BoxCoder:
    """
    Box Coordinate Conversion Utilities.
    Scales Deltas by a Per-Coordinate Standard Deviation so Regression Targets
    Have Roughly Unit Variance.
    """

    # Initialize.
    def __init__(self, std_dev=(1.0, 1.0, 1.0, 1.0)):
        """
        Args:
            std_dev (sequence): Four Values Dividing (dy, dx, dh, dw).
        """
        std_dev = tuple(float(s) for s in std_dev)
        if len(std_dev) != 4:
            raise ValueError(f"std_dev needs 4 values (dy, dx, dh, dw), got {len(std_dev)}")
        self.std_dev = std_dev

    def _std(self, like):
        return torch.tensor(self.std_dev, dtype=like.dtype, device=like.device)

    # Encode Boxes.
    def encode(self, boxes, gt_boxes):
        """Convert Box Coordinates to Normalized Deltas."""
        deltas = box_refinement(boxes, gt_boxes)
        return deltas / self._std(deltas)

    # Decode Boxes.
    def decode(self, boxes, deltas):
        """Convert Normalized Deltas Back to Box Coordinates."""
        return apply_box_deltas(boxes, deltas * self._std(deltas))

    def __repr__(self):
        return f"{self.__class__.__name__}(std_dev={self.std_dev})"
