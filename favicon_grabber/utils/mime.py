import mimetypes
from typing import Mapping, Optional, Sequence

# Preferred extensions for icon MIME types; mimetypes is inconsistent here
ICON_MIME_EXTENSIONS: Mapping[str, str] = {
    "image/x-icon": ".ico",
    "image/vnd.microsoft.icon": ".ico",
    "image/ico": ".ico",
    "image/icon": ".ico",
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/svg+xml": ".svg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def media_type(content_type: Optional[str]) -> str:
    """``"image/png; charset=binary"`` -> ``"image/png"``."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def content_type_matches(content_type: Optional[str], allowed: Sequence[str]) -> bool:
    """Check if any allow-listed substring occurs in the content-type."""
    if not content_type:
        return False
    lowered = content_type.lower()
    return any(entry.lower() in lowered for entry in allowed)


def extension_from_content_type(content_type: Optional[str]) -> Optional[str]:
    """Infer a file extension (with leading dot) from a content-type header."""
    ctype = media_type(content_type)
    if not ctype:
        return None
    if ctype in ICON_MIME_EXTENSIONS:
        return ICON_MIME_EXTENSIONS[ctype]
    return mimetypes.guess_extension(ctype)


def path_has_extension_for(path: str, content_type: Optional[str]) -> bool:
    """Check if the extension of ``path`` already denotes ``content_type``.

    Aliases count: ``photo.jpeg`` matches ``image/jpeg`` as well as ``.jpg``.
    """
    expected = extension_from_content_type(content_type)
    if not expected:
        return False
    if path.lower().endswith(expected):
        return True
    guessed, _ = mimetypes.guess_type(path)
    return bool(guessed) and extension_from_content_type(guessed) == expected


def media_type_for_path(path: str) -> str:
    guessed, _ = mimetypes.guess_type(path)
    if guessed:
        return guessed
    return "image/x-icon" if path.lower().endswith(".ico") else "application/octet-stream"
