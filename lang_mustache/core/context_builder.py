# lang_mustache/core/context_builder.py
"""
Builds the parameter mapping a template is rendered against from JSON
params files and KEY=VALUE variables.
"""
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from lang_mustache.logging_setup import get_logger
from lang_mustache.exceptions import ParamsError

log = get_logger(__name__)

def load_params_file(params_path: Path) -> Dict[str, Any]:
    """Loads one JSON params file, which must hold a top-level object."""
    log.debug("loading_params_file", path=str(params_path))
    try:
        with params_path.open("r", encoding="utf-8-sig") as f:
            data = json.load(f)
    except OSError as e:
        raise ParamsError(f"failed to read params file '{params_path}': {e}") from e
    except json.JSONDecodeError as e:
        raise ParamsError(f"params file '{params_path}' is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ParamsError(f"params file '{params_path}' must contain a JSON object, got {type(data).__name__}")
    return data

def parse_user_vars(raw_vars: Iterable[str]) -> Dict[str, str]:
    # turns ("key=value", ...) into a dict; later keys win.
    user_vars: Dict[str, str] = {}
    for raw in raw_vars:
        if "=" not in raw:
            raise ParamsError(f"invalid variable '{raw}', expected KEY=VALUE")
        key, value = raw.split("=", 1)
        if not key.strip():
            raise ParamsError(f"invalid variable '{raw}', key is empty")
        user_vars[key.strip()] = value
    return user_vars

def build_render_context(params_paths: Iterable[Path],
                         user_vars: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Merges params files in order (top-level keys of later files win), then variables."""
    context: Dict[str, Any] = {}
    for params_path in params_paths:
        context.update(load_params_file(params_path))
    if user_vars:
        context.update(user_vars)
    log.info("render_context_prepared", keys=list(context.keys()))
    return context
