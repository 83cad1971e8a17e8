import sys
from pathlib import Path
import structlog
from egogen.exceptions import OutputError

log = structlog.get_logger(__name__)

def write_to_stdout(text_content: str):
    # writes text to standard output.
    sys.stdout.write(text_content)
    sys.stdout.flush()

def write_to_file(output_file_path: Path, text_content: str):
    # writes generated source to the specified file path.
    log.info("writing_output_to_file", path=str(output_file_path), size=len(text_content))
    try:
        output_file_path.write_text(text_content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"failed to write to file '{output_file_path}': {e}") from e
