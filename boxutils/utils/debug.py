import torch
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import matplotlib.patches as patches
import numpy as np
from pathlib import Path

from boxutils.utils.clipping import Window

class BoxDebugger:
    """Helper class for inspecting (y1, x1, y2, x2) box sets."""

    def __init__(self, save_dir="debug_output"):
        self.save_dir = Path(save_dir)
        self.save_dir.mkdir(parents=True, exist_ok=True)

    def analyze_boxes(self, boxes, name="boxes"):
        """Analyze box statistics and potential issues."""
        if isinstance(boxes, torch.Tensor):
            boxes = boxes.detach().cpu().numpy()
        boxes = np.asarray(boxes, dtype=np.float64).reshape(-1, 4)

        if len(boxes) == 0:
            return {}, [f"{name}: empty box set"]

        # Compute basic statistics
        heights = boxes[:, 2] - boxes[:, 0]
        widths = boxes[:, 3] - boxes[:, 1]
        areas = heights * widths
        with np.errstate(divide='ignore', invalid='ignore'):
            aspect_ratios = widths / heights

        stats = {
            "height": {"min": heights.min(), "max": heights.max(), "mean": heights.mean()},
            "width": {"min": widths.min(), "max": widths.max(), "mean": widths.mean()},
            "area": {"min": areas.min(), "max": areas.max(), "mean": areas.mean()},
            "aspect_ratio": {"min": aspect_ratios.min(), "max": aspect_ratios.max(), "mean": aspect_ratios.mean()}
        }

        # Check for potential issues
        issues = []
        if (heights <= 0).any():
            issues.append(f"{name}: {int((heights <= 0).sum())} boxes with zero or negative height")
        if (widths <= 0).any():
            issues.append(f"{name}: {int((widths <= 0).sum())} boxes with zero or negative width")
        if (areas <= 0).any():
            issues.append(f"{name}: {int((areas <= 0).sum())} boxes with zero or negative area")
        if not np.isfinite(boxes).all():
            issues.append(f"{name}: found boxes with non-finite coordinates")

        return stats, issues

    def plot_boxes(self, boxes, window=None, filename="boxes.png", title=None):
        """Draw boxes, and optionally the clipping window, to a PNG in save_dir."""
        if isinstance(boxes, torch.Tensor):
            boxes = boxes.detach().cpu().numpy()
        boxes = np.asarray(boxes, dtype=np.float64).reshape(-1, 4)

        fig, ax = plt.subplots(1, 1, figsize=(8, 8))

        for y1, x1, y2, x2 in boxes:
            rect = patches.Rectangle(
                (x1, y1), x2 - x1, y2 - y1,
                linewidth=1, edgecolor='g', facecolor='none'
            )
            ax.add_patch(rect)

        corners = [boxes[:, [1, 3]].ravel(), boxes[:, [0, 2]].ravel()]
        if window is not None:
            window = Window.from_any(window)
            ax.add_patch(patches.Rectangle(
                (window.x1, window.y1), window.x2 - window.x1, window.y2 - window.y1,
                linewidth=2, edgecolor='r', linestyle='--', facecolor='none'
            ))
            corners[0] = np.append(corners[0], [window.x1, window.x2])
            corners[1] = np.append(corners[1], [window.y1, window.y2])

        finite_x = corners[0][np.isfinite(corners[0])]
        finite_y = corners[1][np.isfinite(corners[1])]
        if len(finite_x) and len(finite_y):
            ax.set_xlim(finite_x.min() - 1, finite_x.max() + 1)
            ax.set_ylim(finite_y.max() + 1, finite_y.min() - 1)  # image rows grow downward

        ax.set_title(title or f"{len(boxes)} boxes")
        ax.set_xlabel('x')
        ax.set_ylabel('y')

        save_path = self.save_dir / filename
        plt.savefig(save_path)
        plt.close(fig)
        return save_path
