from .app import App
from .datadir import find_data_dir
from .options import Options, parse_options, usage

__all__ = ["App", "Options", "find_data_dir", "parse_options", "usage"]
