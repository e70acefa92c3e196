import sys
from pathlib import Path
from lang_mustache.logging_setup import get_logger
from lang_mustache.exceptions import OutputError

log = get_logger(__name__)

def write_to_stdout(content: bytes):
    # writes rendered bytes to standard output.
    try:
        sys.stdout.buffer.write(content)
        sys.stdout.buffer.flush()
    except AttributeError:
        # text-only streams (e.g. some test runners) have no .buffer.
        log.debug("stdout_has_no_buffer_writing_text")
        sys.stdout.write(content.decode("utf-8", errors="replace"))
        sys.stdout.flush()
    except OSError as e:
        raise OutputError(f"failed to write to stdout: {e}") from e

def write_to_file(output_file_path: Path, content: bytes):
    # writes rendered bytes to the specified file path.
    log.info("writing_output_to_file", path=str(output_file_path))
    try:
        output_file_path.write_bytes(content)
    except OSError as e:
        raise OutputError(f"failed to write to file '{output_file_path}': {e}") from e
