"""Per-call acquisition overrides."""
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional, Union


# camelCase option names accepted alongside the field names
_OPTION_ALIASES = {
    "fileExtFromContentTypeHeader": "file_ext_from_content_type_header",
    "fileExtFromMagicNumber": "file_ext_from_magic_number",
    "ignoreContentTypeHeader": "ignore_content_type_header",
    "searchMetaTags": "search_meta_tags",
}


@dataclass(frozen=True)
class FetchOverrides:
    """Options changing how a favicon is fetched and saved.

    Attributes:
        file_ext_from_content_type_header: Append the extension implied by
            the response content-type to the output path.
        file_ext_from_magic_number: Rename the saved file to the extension
            found by signature sniffing.
        ignore_content_type_header: Skip content-type validation entirely.
        search_meta_tags: Also scan ``<meta content=...>`` for icon references.
    """
    file_ext_from_content_type_header: bool = False
    file_ext_from_magic_number: bool = False
    ignore_content_type_header: bool = False
    search_meta_tags: bool = False

    @classmethod
    def from_options(
        cls,
        options: Optional[Union["FetchOverrides", Mapping[str, Any]]] = None,
    ) -> "FetchOverrides":
        """Overlay caller options on the defaults.

        Keys that are absent keep their default value.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options

        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown override option: {key!r}")
            values[name] = bool(value)
        return cls(**values)

    def with_options(self, **changes: bool) -> "FetchOverrides":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)
