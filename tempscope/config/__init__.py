from .defaults import TMP, TempDefaults
from .paths import resolve_temp_dir

__all__ = ["TMP", "TempDefaults", "resolve_temp_dir"]
