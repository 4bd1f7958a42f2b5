import pytest
import torch
from boxutils.utils.clipping import Window, clip_boxes, clip_to_window
from boxutils.benchmark import random_boxes

def test_clip_box_larger_than_window():
    """Test a box covering the window is cut to the window"""
    boxes = torch.tensor([[-5.0, -5.0, 20.0, 20.0]])
    window = Window(0.0, 0.0, 10.0, 10.0)

    expected = torch.tensor([[0.0, 0.0, 10.0, 10.0]])
    assert torch.equal(clip_boxes(boxes, window), expected)
    assert torch.equal(clip_to_window(boxes.clone(), window), expected)

def test_clip_keeps_input_unmodified():
    """Test the copy variant leaves its input alone"""
    boxes = torch.tensor([[-5.0, -5.0, 20.0, 20.0]])
    before = boxes.clone()

    clipped = clip_boxes(boxes, [0, 0, 10, 10])

    assert torch.equal(boxes, before)
    assert clipped.data_ptr() != boxes.data_ptr()

def test_clip_to_window_is_in_place():
    """Test the in-place variant returns and mutates the same tensor"""
    boxes = torch.tensor([[-5.0, -5.0, 20.0, 20.0], [2.0, 3.0, 4.0, 5.0]])

    result = clip_to_window(boxes, [0, 0, 10, 10])

    assert result is boxes
    assert torch.equal(boxes, torch.tensor([[0.0, 0.0, 10.0, 10.0], [2.0, 3.0, 4.0, 5.0]]))

def test_clip_uses_y_and_x_bounds_separately():
    """Test columns 0, 2 use the y range and columns 1, 3 the x range"""
    boxes = torch.tensor([[-100.0, -100.0, 100.0, 100.0]])
    window = Window(10.0, 20.0, 30.0, 40.0)

    expected = torch.tensor([[10.0, 20.0, 30.0, 40.0]])
    assert torch.equal(clip_boxes(boxes, window), expected)
    assert torch.equal(clip_to_window(boxes, window), expected)

def test_clip_bounds_for_random_boxes():
    """Test every clipped coordinate lands inside the window, including boxes outside it"""
    generator = torch.Generator().manual_seed(0)
    boxes = random_boxes(100, 200.0, generator) - 50.0  # some boxes fall fully outside
    window = Window(20.0, 30.0, 90.0, 120.0)

    clipped = clip_boxes(boxes, window)
    in_place = clip_to_window(boxes.clone(), window)

    assert torch.equal(clipped, in_place), "Copy and in-place variants differ"
    assert (clipped[:, [0, 2]] >= window.y1).all() and (clipped[:, [0, 2]] <= window.y2).all()
    assert (clipped[:, [1, 3]] >= window.x1).all() and (clipped[:, [1, 3]] <= window.x2).all()

def test_boxes_inside_window_unchanged():
    """Test clipping is a no-op for boxes already inside"""
    boxes = torch.tensor([[1.0, 2.0, 3.0, 4.0], [0.0, 0.0, 10.0, 10.0]])
    assert torch.equal(clip_boxes(boxes, (0, 0, 10, 10)), boxes)

def test_tensor_window():
    """Test a [4] tensor works as the window"""
    boxes = torch.tensor([[-5.0, -5.0, 20.0, 20.0]], dtype=torch.float64)
    window = torch.tensor([0.0, 0.0, 10.0, 10.0])

    clipped = clip_boxes(boxes, window)

    assert clipped.dtype == torch.float64
    assert torch.equal(clipped, torch.tensor([[0.0, 0.0, 10.0, 10.0]], dtype=torch.float64))

def test_inverted_window_is_not_reordered():
    """Test an inverted window gives inverted boxes rather than raising"""
    boxes = torch.tensor([[0.0, 0.0, 10.0, 10.0]])
    window = Window(8.0, 8.0, 2.0, 2.0)

    clipped = clip_boxes(boxes, window)

    assert torch.equal(clipped, clip_to_window(boxes.clone(), window))
    assert torch.equal(clipped, torch.full((1, 4), 2.0))

def test_integer_boxes():
    """Test integer boxes clip to a float copy but can't be clipped in place"""
    boxes = torch.tensor([[-5, -5, 20, 20]])

    clipped = clip_boxes(boxes, [0, 0, 10, 10])

    assert clipped.is_floating_point()
    assert torch.equal(clipped, torch.tensor([[0.0, 0.0, 10.0, 10.0]], dtype=clipped.dtype))
    with pytest.raises(RuntimeError):
        clip_to_window(boxes, [0, 0, 10, 10])

def test_window_from_any():
    """Test Window conversion from different inputs"""
    assert Window.from_any([1, 2, 3, 4]) == Window(1.0, 2.0, 3.0, 4.0)
    assert Window.from_any(torch.tensor([1.0, 2.0, 3.0, 4.0])) == Window(1.0, 2.0, 3.0, 4.0)
    window = Window(0.0, 0.0, 1.0, 1.0)
    assert Window.from_any(window) is window

def test_window_needs_four_values():
    """Test a window of the wrong length fails in conversion"""
    with pytest.raises(TypeError):
        clip_boxes(torch.zeros((1, 4)), [0, 0, 10])
