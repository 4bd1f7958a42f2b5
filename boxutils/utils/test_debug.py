import math
import torch
from boxutils.utils.debug import BoxDebugger
from boxutils.utils.logger import ColorLogger

def test_analyze_boxes(tmp_path):
    """Test box statistics use (y1, x1, y2, x2) order"""
    debugger = BoxDebugger(save_dir=tmp_path)
    boxes = torch.tensor([[0.0, 0.0, 10.0, 20.0], [0.0, 0.0, 30.0, 20.0]])

    stats, issues = debugger.analyze_boxes(boxes)

    assert issues == []
    assert stats['height']['max'] == 30.0
    assert stats['width']['mean'] == 20.0
    assert stats['area']['min'] == 200.0

def test_analyze_degenerate_boxes(tmp_path):
    """Test degenerate and non-finite boxes are reported"""
    debugger = BoxDebugger(save_dir=tmp_path)
    boxes = torch.tensor([[5.0, 0.0, 5.0, 10.0], [0.0, 0.0, 1.0, math.inf]])

    _, issues = debugger.analyze_boxes(boxes, name="anchors")

    assert any("height" in issue for issue in issues)
    assert any("non-finite" in issue for issue in issues)
    assert all(issue.startswith("anchors") for issue in issues)

def test_analyze_empty(tmp_path):
    """Test an empty box set"""
    stats, issues = BoxDebugger(save_dir=tmp_path).analyze_boxes(torch.zeros((0, 4)))
    assert stats == {}
    assert issues

def test_plot_boxes(tmp_path):
    """Test boxes and window are drawn to a PNG"""
    debugger = BoxDebugger(save_dir=tmp_path)
    boxes = torch.tensor([[-5.0, -5.0, 20.0, 20.0], [2.0, 2.0, 4.0, 6.0]])

    path = debugger.plot_boxes(boxes, window=[0, 0, 10, 10], filename="clip.png")

    assert path == tmp_path / "clip.png"
    assert path.exists() and path.stat().st_size > 0

def test_color_logger_is_shared(tmp_path, capsys):
    """Test the logger is a singleton and writes to its log file"""
    ColorLogger.reset()
    try:
        logger = ColorLogger(log_dir=tmp_path)
        assert ColorLogger() is logger

        logger.info("hello")
        logger.debug("file only")
        logger.error("broken")

        out = capsys.readouterr().out
        assert "hello" in out
        assert "file only" not in out
        assert "ERROR: broken" in out

        text = logger.log_file.read_text()
        assert "hello" in text and "file only" in text and "broken" in text
    finally:
        ColorLogger.reset()

def test_color_logger_reports_ignored_log_dir(tmp_path, capsys):
    """Test asking the shared logger for a second log directory warns and keeps the first"""
    ColorLogger.reset()
    try:
        first = tmp_path / "first"
        second = tmp_path / "second"
        logger = ColorLogger(log_dir=first)
        capsys.readouterr()

        assert ColorLogger(log_dir=second) is logger
        assert logger.log_file.parent == first
        assert "ignoring log_dir" in capsys.readouterr().out

        ColorLogger(log_dir=first)
        assert "ignoring log_dir" not in capsys.readouterr().out
    finally:
        ColorLogger.reset()
