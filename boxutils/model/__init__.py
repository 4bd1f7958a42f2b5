from .box_coder import BoxCoder, box_refinement, apply_box_deltas
