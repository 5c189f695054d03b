"""Output path templating."""
import posixpath
import re
from urllib.parse import urlparse

PLACEHOLDER_RE = re.compile(r"%(basename|filestem|extname)%", re.IGNORECASE)


def source_parts(source) -> dict:
    """Split the path of ``source`` into basename, filestem and extname.

    Query string and fragment are dropped first. A URL without a file name
    (``https://example.com`` or ``https://example.com/docs/``) uses its
    hostname as basename and filestem, with no extension.
    """
    parsed = urlparse(str(source))
    basename = posixpath.basename(parsed.path)
    if not basename:
        host = parsed.hostname or ""
        return {"basename": host, "filestem": host, "extname": ""}
    filestem, extname = posixpath.splitext(basename)
    return {"basename": basename, "filestem": filestem, "extname": extname}


def parse_output_format(out_path_format: str, source) -> str:
    """Render ``out_path_format`` against the file named by ``source``.

    Supported placeholders (case-insensitive, may repeat):
    ``%basename%`` file name with extension, ``%filestem%`` file name
    without extension, ``%extname%`` extension with its leading dot.

    Example:
        >>> parse_output_format("out/output%extname%", "https://x/a.png")
        'out/output.png'
    """
    parts = source_parts(source)
    # One pass, so substituted text is never expanded again
    return PLACEHOLDER_RE.sub(lambda m: parts[m.group(1).lower()], out_path_format)
