from .utils.box_ops import box_area, bbox_overlaps, bbox_overlaps_loops, compute_iou
from .utils.clipping import Window, clip_boxes, clip_to_window
from .model.box_coder import BoxCoder, box_refinement, apply_box_deltas

__version__ = '0.1.0'
