"""Detect the real type of a saved icon from its leading bytes."""
import logging
import os
from typing import Optional, Tuple

from favicon_grabber.core.config import SIGNATURE_READ_BYTES

logger = logging.getLogger(__name__)

# Checked in order: specific JPEG markers before the generic JPEG prefix
SIGNATURES: Tuple[Tuple[str, str], ...] = (
    ("FFD8FFE0", ".jpg"),  # JFIF
    ("FFD8FFE1", ".jpg"),  # Exif
    ("FFD8FFDB", ".jpg"),
    ("FFD8FFEE", ".jpg"),
    ("FFD8FF", ".jpg"),
    ("89504E470D0A1A0A", ".png"),
    ("00000100", ".ico"),
)


def read_signature(path: str, length: int = SIGNATURE_READ_BYTES) -> str:
    """Return the first ``length`` bytes of the file as uppercase hex."""
    with open(path, "rb") as f:
        head = f.read(length)
    return head.hex().upper()


def match_signature(signature: str) -> Optional[str]:
    for prefix, extension in SIGNATURES:
        if signature.startswith(prefix):
            return extension
    return None


def detect_signature(path: str) -> Optional[str]:
    """Extension matching the file's byte signature, or ``None``."""
    return match_signature(read_signature(path))


def fix_extension(path: str, log: Optional[logging.Logger] = None) -> str:
    """Rename ``path`` so its extension matches its byte signature.

    Only the trailing extension segment is replaced, and a file already
    at the new path is overwritten. Unknown signatures leave the file
    untouched.

    Returns:
        The final path of the file
    """
    log = log or logger
    signature = read_signature(path)
    detected = match_signature(signature)
    if detected is None:
        log.warning(f"⚠️ Unknown file signature {signature[:16]} for {path}, keeping name")
        return path

    root, current = os.path.splitext(path)
    if current.lower() == detected:
        log.debug(f"Signature of {path} matches its extension ({detected})")
        return path

    new_path = root + detected
    if os.path.exists(new_path):
        log.warning(f"⚠️ Overwriting existing {new_path} with {path}")
    os.replace(path, new_path)
    log.debug(f"Renamed {path} -> {new_path} (signature {detected})")
    return new_path
