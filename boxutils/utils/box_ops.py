# utils / box_ops.py

# -----
# Computes IoU Between Two Sets of Boxes.
# Boxes are [N, 4] Tensors in (y1, x1, y2, x2) Order.
# Vectorized Version Tiles Both Sets, Looped Version Goes One Column at a Time.
# -----

# Imports.
import torch

# Box Area Function.
def box_area(boxes):
    """Compute (y2 - y1) * (x2 - x1) for Each Row of [N, 4] Boxes."""
    return (boxes[:, 2] - boxes[:, 0]) * (boxes[:, 3] - boxes[:, 1])

# ----------------------------------------------------------------------------

# Box Overlaps Function.
def bbox_overlaps(boxes1, boxes2):
    """
    Compute Intersection-over-Union (IoU) Between Two Sets of Boxes.

    Every Pair is Built Explicitly: Each Row of boxes1 is Repeated C Times
    and boxes2 is Tiled R Times, so Flat Index i * C + j Pairs boxes1[i]
    with boxes2[j].

    Args:
        boxes1 (torch.Tensor): [R, 4] Boxes (y1, x1, y2, x2).
        boxes2 (torch.Tensor): [C, 4] Boxes (y1, x1, y2, x2).

    Returns:
        torch.Tensor: [R, C] IoU Matrix, IoU[i, j] = IoU(boxes1[i], boxes2[j]).
    """

    # Tile boxes2 & Repeat boxes1.
    num1 = boxes1.size(0)
    num2 = boxes2.size(0)
    b1 = boxes1.repeat(1, num2).view(num1 * num2, 4)  # [R*C, 4]
    b2 = boxes2.repeat(num1, 1)                       # [R*C, 4]

    # Compute Intersections.
    b1_y1, b1_x1, b1_y2, b1_x2 = b1.unbind(dim=1)
    b2_y1, b2_x1, b2_y2, b2_x2 = b2.unbind(dim=1)
    y1 = torch.max(b1_y1, b2_y1)
    x1 = torch.max(b1_x1, b2_x1)
    y2 = torch.min(b1_y2, b2_y2)
    x2 = torch.min(b1_x2, b2_x2)
    zeros = torch.zeros_like(y1)
    intersection = torch.max(y2 - y1, zeros) * torch.max(x2 - x1, zeros)

    # Compute Unions.
    b1_area = (b1_y2 - b1_y1) * (b1_x2 - b1_x1)
    b2_area = (b2_y2 - b2_y1) * (b2_x2 - b2_x1)
    union = b1_area + b2_area - intersection

    # Compute IoU & Reshape to [boxes1, boxes2].
    iou = intersection / union
    return iou.view(num1, num2)

# ----------------------------------------------------------------------------

# Single Box IoU Function.
def compute_iou(box, boxes, box_area, boxes_area):
    """
    Calculate IoU of One Box Against an Array of Boxes.

    The Areas are Passed in Rather Than Computed Here. Compute Them Once in
    the Caller so a Loop Over Many Boxes Doesn't Redo the Work.

    Args:
        box (torch.Tensor):         [4] Box (y1, x1, y2, x2).
        boxes (torch.Tensor):       [N, 4] Boxes.
        box_area (torch.Tensor):    Area of 'box' (Scalar).
        boxes_area (torch.Tensor):  [N] Areas of 'boxes'.

    Returns:
        torch.Tensor: [N] IoU Values.
    """
    y1 = torch.max(box[0], boxes[:, 0])
    x1 = torch.max(box[1], boxes[:, 1])
    y2 = torch.min(box[2], boxes[:, 2])
    x2 = torch.min(box[3], boxes[:, 3])
    zeros = torch.zeros_like(y1)
    intersection = torch.max(y2 - y1, zeros) * torch.max(x2 - x1, zeros)
    union = box_area + boxes_area - intersection
    return intersection / union

# ----------------------------------------------------------------------------

# Looped Box Overlaps Function.
def bbox_overlaps_loops(boxes1, boxes2):
    """
    Compute the Same [R, C] IoU Matrix as bbox_overlaps, One Column at a Time.

    Args:
        boxes1 (torch.Tensor): [R, 4] Boxes (y1, x1, y2, x2).
        boxes2 (torch.Tensor): [C, 4] Boxes (y1, x1, y2, x2).

    Returns:
        torch.Tensor: [R, C] IoU Matrix, in the Promoted Floating Dtype of
                      Both Inputs (Default Dtype for Integer Boxes).
    """

    # Work in the Dtype the Division Produces.
    dtype = torch.promote_types(boxes1.dtype, boxes2.dtype)
    if not dtype.is_floating_point:
        dtype = torch.get_default_dtype()
    boxes1 = boxes1.to(dtype)
    boxes2 = boxes2.to(dtype)

    # Areas of Both Sets, Computed Once.
    area1 = box_area(boxes1)
    area2 = box_area(boxes2)

    # Each Column j Holds IoU of boxes2[j] Against All of boxes1.
    overlaps = torch.zeros((boxes1.size(0), boxes2.size(0)),
                           dtype=dtype, device=boxes1.device)
    for j in range(overlaps.size(1)):
        overlaps[:, j] = compute_iou(boxes2[j], boxes1, area2[j], area1)
    return overlaps
