# utils / logger.py

# -----
# Colored Console Logging With an Optional Log File.
# -----

# Imports.
import logging
from datetime import datetime
from pathlib import Path
from colorama import init, Fore, Style

# Initialize colorama for Windows support
init()

# Color Logger Class.
class ColorLogger:
    """Single Shared Logger. Console Output is Colored, Debug Goes to File Only."""

    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, log_dir=None):
        if not hasattr(self, 'initialized'):
            self.initialized = True
            self.log_file = None
            self.logger = logging.getLogger('boxutils')
            self.logger.setLevel(logging.DEBUG)
            self.logger.propagate = False
        if log_dir is None:
            return
        if self.log_file is None:
            self.setup_file_handler(log_dir)
        elif Path(log_dir).resolve() != self.log_file.parent.resolve():
            self.warning(f"Already logging to {self.log_file}, ignoring log_dir {log_dir}")

    def setup_file_handler(self, log_dir):
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        # Create file handler
        self.log_file = log_dir / f'boxutils_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        file_handler = logging.FileHandler(self.log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
        self.logger.addHandler(file_handler)

    @classmethod
    def reset(cls):
        """Drop the Shared Instance & Close its File Handlers."""
        if cls._instance is not None and hasattr(cls._instance, 'logger'):
            for handler in list(cls._instance.logger.handlers):
                handler.close()
                cls._instance.logger.removeHandler(handler)
        cls._instance = None

    def debug(self, msg):
        """Log debug message (only to file)"""
        self.logger.debug(msg)

    def info(self, msg, color=None):
        """Log info message with optional color"""
        self.logger.info(msg)
        print(f"{color}{msg}{Style.RESET_ALL}" if color else msg)

    def warning(self, msg):
        """Log warning message in yellow"""
        self.logger.warning(msg)
        print(f"{Fore.YELLOW}WARNING: {msg}{Style.RESET_ALL}")

    def error(self, msg):
        """Log error message in red"""
        self.logger.error(msg)
        print(f"{Fore.RED}ERROR: {msg}{Style.RESET_ALL}")

    def success(self, msg):
        """Log success message in green"""
        self.logger.info(msg)
        print(f"{Fore.GREEN}{msg}{Style.RESET_ALL}")
