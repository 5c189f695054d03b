"""Utils module - URL, path, MIME and file signature helpers."""

from favicon_grabber.utils.output_format import parse_output_format
from favicon_grabber.utils.signature_sniffer import detect_signature, fix_extension
from favicon_grabber.utils.url_normalizer import (
    parse_target_url,
    get_origin,
    get_hostname,
    has_file_extension,
    resolve_href,
)
from favicon_grabber.utils.mime import (
    content_type_matches,
    extension_from_content_type,
)

__all__ = [
    "parse_output_format",
    "detect_signature",
    "fix_extension",
    "parse_target_url",
    "get_origin",
    "get_hostname",
    "has_file_extension",
    "resolve_href",
    "content_type_matches",
    "extension_from_content_type",
]
