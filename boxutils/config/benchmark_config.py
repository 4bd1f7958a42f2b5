# config / benchmark_config.py

# -----
# Default Settings for the Benchmark & Consistency Checks.
# YAML Files Override the Defaults, Command Line Flags Override the File.
# -----

# Imports.
from pathlib import Path
import yaml
import torch

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'config.yaml'

DTYPES = {
    'float32': torch.float32,
    'float64': torch.float64,
}

def get_benchmark_config():
    return {
        # Box Sets
        'num_boxes1': 256,
        'num_boxes2': 64,
        'image_size': 1024,
        'seed': 42,

        # Runtime
        'device': 'auto',
        'dtype': 'float32',
        'runs': 5,
        'warmup': 1,

        # Checks
        'tolerance': 1e-6,

        # Logging
        'log_dir': None,
    }

# ----------------------------------------------------------------------------

def load_config(config_path=None, overrides=None):
    """
    Load YAML Configuration & Merge it Over the Defaults.

    Args:
        config_path: Path to a YAML File. Keys May Sit at Top Level or
                     Under a 'benchmark' Section. None Uses Defaults Only.
        overrides:   Dict of Values Taking Precedence Over the File. None
                     Values are Ignored.

    Returns:
        dict: Validated Configuration.
    """
    config = get_benchmark_config()

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file must hold a mapping: {config_path}")
        loaded = loaded.get('benchmark', loaded)
        _merge(config, loaded)

    if overrides:
        _merge(config, {k: v for k, v in overrides.items() if v is not None})

    validate_config(config)
    return config

def _merge(config, values):
    unknown = sorted(set(values) - set(config))
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    config.update(values)

def validate_config(config):
    """Raise ValueError Naming the First Bad Setting."""
    for key in ('num_boxes1', 'num_boxes2', 'runs'):
        if int(config[key]) < 1:
            raise ValueError(f"'{key}' must be at least 1, got {config[key]}")
    if int(config['warmup']) < 0:
        raise ValueError(f"'warmup' must be non-negative, got {config['warmup']}")
    if float(config['image_size']) <= 0:
        raise ValueError(f"'image_size' must be positive, got {config['image_size']}")
    if float(config['tolerance']) < 0:
        raise ValueError(f"'tolerance' must be non-negative, got {config['tolerance']}")
    resolve_dtype(config['dtype'])
    resolve_device(config['device'])

# ----------------------------------------------------------------------------

def resolve_dtype(name):
    if name not in DTYPES:
        raise ValueError(f"'dtype' must be one of {sorted(DTYPES)}, got {name!r}")
    return DTYPES[name]

def resolve_device(name):
    """Map 'auto', 'cpu', 'cuda' or 'cuda:N' to a torch.device."""
    a = (name or '').strip().lower()
    if a == 'auto':
        return torch.device('cuda' if torch.cuda.is_available() else 'cpu')
    if a == 'cpu' or a.startswith('cuda'):
        try:
            return torch.device(a)
        except RuntimeError as e:
            raise ValueError(f"Invalid device {name!r}: {e}") from e
    raise ValueError(f"'device' must be 'auto', 'cpu' or 'cuda[:N]', got {name!r}")
