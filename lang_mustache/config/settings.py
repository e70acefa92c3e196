from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from lang_mustache.logging_setup import get_logger
from lang_mustache.exceptions import ConfigError

log = get_logger(__name__)

class Escaping(Enum):
    # how plain {{variable}} substitutions are escaped.
    NONE = "none"
    JSON = "json"
    URL = "url"

    @classmethod
    def from_string(cls, s: Optional[str]) -> Optional["Escaping"]:
        if not s:
            return None
        try:
            return cls(s.lower())
        except ValueError:
            log.warning("invalid_escaping_string", input_string=s)
            return None

# host-style content types accepted in the compile options mapping.
CONTENT_TYPE_TO_ESCAPING: Dict[str, Escaping] = {
    "text/plain": Escaping.NONE,
    "application/json": Escaping.JSON,
    "application/x-www-form-urlencoded": Escaping.URL,
}

DEFAULT_ESCAPING = Escaping.NONE
DEFAULT_JOIN_DELIMITER = ","

@dataclass(frozen=True)
class EngineOptions:
    # compile-time options; frozen so compiled templates can hold a reference.
    escaping: Escaping = DEFAULT_ESCAPING

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "EngineOptions":
        """Builds options from a loose mapping such as a host's script options.

        Accepts ``escaping`` (``none``/``json``/``url``) or a ``content_type``
        media type. Unknown keys are ignored, invalid values raise ConfigError.
        """
        if not options:
            return cls()
        escaping = DEFAULT_ESCAPING
        if "content_type" in options:
            content_type = str(options["content_type"]).lower()
            if content_type not in CONTENT_TYPE_TO_ESCAPING:
                raise ConfigError(f"unsupported content_type '{options['content_type']}'")
            escaping = CONTENT_TYPE_TO_ESCAPING[content_type]
        if "escaping" in options:
            value = options["escaping"]
            parsed = value if isinstance(value, Escaping) else Escaping.from_string(str(value))
            if parsed is None:
                raise ConfigError(f"unsupported escaping '{value}'")
            escaping = parsed
        return cls(escaping=escaping)

@dataclass
class RenderConfig:
    # holds all configuration parameters for a single cli run.
    template_path: Optional[Path] = None
    template_text: Optional[str] = None
    params_paths: List[Path] = field(default_factory=list)
    user_vars: Dict[str, str] = field(default_factory=dict)
    escaping: Escaping = DEFAULT_ESCAPING
    output_file: Optional[Path] = None

    def engine_options(self) -> EngineOptions:
        return EngineOptions(escaping=self.escaping)
