from .box_ops import box_area, bbox_overlaps, bbox_overlaps_loops, compute_iou
from .clipping import Window, clip_boxes, clip_to_window
