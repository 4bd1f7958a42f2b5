from .benchmark_config import get_benchmark_config, load_config, resolve_device, resolve_dtype
