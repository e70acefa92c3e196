# lang_mustache/config/loader.py
"""
Handles loading and merging of render configuration from TOML files.
"""
import toml
from pathlib import Path
from typing import Dict, Any, Optional

from lang_mustache.logging_setup import get_logger
from lang_mustache.exceptions import ConfigError

from .settings import RenderConfig, Escaping

log = get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".lang-mustache.toml", "lang-mustache.toml", "pyproject.toml"]
PYPROJECT_TOOL_KEY = "lang-mustache"
USER_CONFIG_DIR = Path.home() / ".config" / "lang-mustache"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEY_TO_RENDERCONFIG_ATTR_MAP: Dict[str, str] = {
    "template": "template_path",
    "params": "params_paths",
    "vars": "user_vars",
    "escaping": "escaping",
    "output_file": "output_file",
}

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file(): return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"could not read config file {file_path}: {e}") from e
    if file_path.name == "pyproject.toml":
        return data.get("tool", {}).get(PYPROJECT_TOOL_KEY, {})
    return data

def load_and_merge_configs(search_dir: Optional[Path] = None,
                           user_config_file: Optional[Path] = None) -> Dict[str, Any]:
    """Merges the user-level config with the first project config found in search_dir.

    Project settings win over user settings; profiles are merged by name.
    search_dir defaults to the working directory, user_config_file to USER_CONFIG_FILE.
    """
    merged_toml_data: Dict[str, Any] = {}
    user_config_file = user_config_file or USER_CONFIG_FILE
    if user_config_file.is_file():
        log.info("loading_user_global_config", path=str(user_config_file))
        merged_toml_data.update(_load_toml_file_data(user_config_file))

    base = search_dir or Path.cwd()
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = base / filename
        if not candidate.is_file():
            continue
        project_settings = _load_toml_file_data(candidate)
        if not project_settings:
            continue
        log.info("loading_project_local_config", path=str(candidate))
        project_profiles = project_settings.pop("profiles", None)
        if isinstance(project_profiles, dict):
            user_profiles = merged_toml_data.get("profiles")
            if isinstance(user_profiles, dict):
                project_profiles = {**user_profiles, **project_profiles}
            merged_toml_data["profiles"] = project_profiles
        merged_toml_data.update(project_settings)
        break
    if not merged_toml_data: log.debug("no_configuration_files_loaded")
    return merged_toml_data

def _coerce_config_value(attr: str, value: Any) -> Any:
    if attr == "escaping":
        parsed = value if isinstance(value, Escaping) else Escaping.from_string(str(value))
        if parsed is None:
            raise ConfigError(f"invalid escaping '{value}' in configuration")
        return parsed
    if attr == "params_paths":
        if isinstance(value, (str, Path)): value = [value]
        if not isinstance(value, list):
            raise ConfigError(f"'params' must be a path or list of paths, got {type(value).__name__}")
        return [Path(p) for p in value]
    if attr in ("template_path", "output_file"):
        return Path(value) if value else None
    if attr == "user_vars":
        if not isinstance(value, dict):
            raise ConfigError(f"'vars' must be a table, got {type(value).__name__}")
        return {str(k): str(v) for k, v in value.items()}
    return value

def build_render_config(toml_data: Dict[str, Any], profile_name: Optional[str] = None,
                        **overrides: Any) -> RenderConfig:
    """Layers top-level settings, then the named profile, then explicit overrides.

    Overrides whose value is None are treated as "not given".
    """
    options: Dict[str, Any] = {}
    for toml_key, attr in CONFIG_KEY_TO_RENDERCONFIG_ATTR_MAP.items():
        if toml_key in toml_data:
            options[attr] = _coerce_config_value(attr, toml_data[toml_key])

    if profile_name:
        profile_values = toml_data.get("profiles", {}).get(profile_name)
        if not profile_values:
            raise ConfigError(f"profile '{profile_name}' not found in configuration files")
        log.info("applying_profile_settings", profile=profile_name)
        for toml_key, attr in CONFIG_KEY_TO_RENDERCONFIG_ATTR_MAP.items():
            if toml_key in profile_values:
                options[attr] = _coerce_config_value(attr, profile_values[toml_key])

    for attr, value in overrides.items():
        if value is None: continue
        if attr == "user_vars":
            # cli vars extend configured vars rather than replacing them.
            options["user_vars"] = {**options.get("user_vars", {}), **value}
        elif attr == "params_paths":
            options["params_paths"] = [*options.get("params_paths", []), *value]
        else:
            options[attr] = value

    log.debug("render_config_built", keys=sorted(options))
    return RenderConfig(**options)
