from pathlib import Path

from lang_mustache.logging_setup import get_logger
from lang_mustache.exceptions import TemplateError

log = get_logger(__name__)
utf8_bom = b"\xef\xbb\xbf"

def strip_utf8_bom(data: bytes) -> bytes:
    # removes the utf-8 byte order mark from byte data if present.
    if data.startswith(utf8_bom):
        return data[len(utf8_bom):]
    return data

def read_template_file(template_path: Path) -> str:
    # reads a template file as utf-8 text, tolerating a leading bom.
    log.debug("reading_template_file", path=str(template_path))
    try:
        raw_bytes = template_path.read_bytes()
    except OSError as e:
        raise TemplateError(f"failed to read template file '{template_path}': {e}") from e
    try:
        return strip_utf8_bom(raw_bytes).decode("utf-8")
    except UnicodeDecodeError as e:
        raise TemplateError(f"template file '{template_path}' is not valid utf-8: {e}") from e
