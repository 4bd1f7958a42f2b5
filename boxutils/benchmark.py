# benchmark.py

# -----

# Compares the Box Operations on Random Boxes.
# Checks -> Vectorized vs Looped IoU, Refinement Round Trip, Clip Bounds.
# Timing -> Mean Seconds per Call for Vectorized & Looped IoU.

# -----

# Imports.
import time
import torch
from tqdm import tqdm

from boxutils.config.benchmark_config import resolve_device, resolve_dtype
from boxutils.model.box_coder import box_refinement, apply_box_deltas
from boxutils.utils.box_ops import bbox_overlaps, bbox_overlaps_loops
from boxutils.utils.clipping import Window, clip_boxes, clip_to_window

# Random Boxes Function.
def random_boxes(n, image_size, generator=None, device='cpu', dtype=torch.float32):
    """
    Generate n Boxes With Positive Height & Width Inside [0, image_size].

    Returns:
        torch.Tensor: [n, 4] Boxes (y1, x1, y2, x2).
    """
    corners = torch.rand((n, 2), generator=generator, dtype=torch.float64) * image_size * 0.9
    sizes = (torch.rand((n, 2), generator=generator, dtype=torch.float64) * 0.5 + 0.01) * image_size
    sizes = torch.min(sizes, image_size - corners)
    boxes = torch.cat([corners, corners + sizes], dim=1)
    return boxes.to(device=device, dtype=dtype)

# ----------------------------------------------------------------------------

# Timing Function.
def time_fn(fn, *args, runs=5, warmup=1, device=None, desc=None):
    """Return Mean Seconds per Call of fn(*args)."""
    sync = device is not None and torch.device(device).type == 'cuda'

    # Warmup
    for _ in range(warmup):
        fn(*args)

    if sync:
        torch.cuda.synchronize()

    total = 0.0
    for _ in tqdm(range(runs), desc=desc or fn.__name__, leave=False):
        start = time.perf_counter()
        fn(*args)
        if sync:
            torch.cuda.synchronize()
        total += time.perf_counter() - start
    return total / runs

# ----------------------------------------------------------------------------

def _make_boxes(config):
    device = resolve_device(config['device'])
    dtype = resolve_dtype(config['dtype'])
    generator = torch.Generator().manual_seed(int(config['seed']))
    size = float(config['image_size'])
    boxes1 = random_boxes(int(config['num_boxes1']), size, generator, device, dtype)
    boxes2 = random_boxes(int(config['num_boxes2']), size, generator, device, dtype)
    return boxes1, boxes2, device

# Consistency Checks Function.
def run_checks(config):
    """
    Run the Consistency Checks on Random Boxes.

    Returns:
        dict: 'iou_max_abs_diff', 'round_trip_max_abs_diff',
              'clip_out_of_bounds', 'clip_variants_match' & 'passed'.
    """
    boxes1, boxes2, _ = _make_boxes(config)
    tolerance = float(config['tolerance'])
    size = float(config['image_size'])

    # Vectorized vs Looped IoU.
    iou_diff = (bbox_overlaps(boxes1, boxes2) - bbox_overlaps_loops(boxes1, boxes2)).abs()
    iou_max_abs_diff = iou_diff.max().item()

    # Refinement Round Trip, Matched Row by Row. Compared Relative to Image Size.
    gt = boxes2[torch.arange(len(boxes1), device=boxes2.device) % len(boxes2)]
    deltas = box_refinement(boxes1, gt)
    restored = apply_box_deltas(boxes1, deltas)
    round_trip_max_abs_diff = ((restored - gt).abs().max() / size).item()

    # Clip to a Window Covering the Middle of the Image.
    window = Window(0.25 * size, 0.25 * size, 0.75 * size, 0.75 * size)
    clipped = clip_boxes(boxes1, window)
    clipped_in_place = clip_to_window(boxes1.clone(), window)
    low = torch.tensor([window.y1, window.x1, window.y1, window.x1], dtype=clipped.dtype, device=clipped.device)
    high = torch.tensor([window.y2, window.x2, window.y2, window.x2], dtype=clipped.dtype, device=clipped.device)
    clip_out_of_bounds = int(((clipped < low) | (clipped > high)).any(dim=1).sum().item())
    clip_variants_match = bool(torch.equal(clipped, clipped_in_place))

    passed = (
        iou_max_abs_diff <= tolerance
        and round_trip_max_abs_diff <= max(tolerance, torch.finfo(boxes1.dtype).eps * 64)
        and clip_out_of_bounds == 0
        and clip_variants_match
    )

    return {
        'num_pairs': len(boxes1) * len(boxes2),
        'num_matched': len(boxes1),
        'iou_max_abs_diff': iou_max_abs_diff,
        'round_trip_max_abs_diff': round_trip_max_abs_diff,
        'clip_out_of_bounds': clip_out_of_bounds,
        'clip_variants_match': clip_variants_match,
        'passed': passed,
    }

# ----------------------------------------------------------------------------

# Benchmark Function.
def run_benchmark(config, logger=None):
    """
    Run the Checks, Then Time Vectorized & Looped IoU.

    Returns:
        dict: Check Results Plus 'vectorized_time', 'looped_time' & 'speedup'.
    """
    results = run_checks(config)
    boxes1, boxes2, device = _make_boxes(config)

    if logger is not None:
        logger.info(f"Timing IoU on {len(boxes1)} x {len(boxes2)} boxes ({device}, {config['dtype']})")

    runs = int(config['runs'])
    warmup = int(config['warmup'])
    with torch.no_grad():
        vectorized_time = time_fn(bbox_overlaps, boxes1, boxes2, runs=runs, warmup=warmup,
                                  device=device, desc='vectorized')
        looped_time = time_fn(bbox_overlaps_loops, boxes1, boxes2, runs=runs, warmup=warmup,
                              device=device, desc='looped')

    results.update({
        'vectorized_time': vectorized_time,
        'looped_time': looped_time,
        'speedup': looped_time / vectorized_time if vectorized_time > 0 else float('inf'),
    })

    if logger is not None:
        logger.debug(f"Benchmark results: {results}")

    return results
