"""Invalidation path templates: sanitizing, filtering and placeholder resolution."""

import re
from typing import Any, Callable, Dict, List, Optional, Sequence

from shared.logger import StructuredLogger

from content_invalidator.models import ContentItem

ID_PLACEHOLDER = "%id%"
SLUG_PLACEHOLDER = "%slug%"

PathFilter = Callable[[List[str], ContentItem], Sequence[str]]

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _with_leading_slash(path: str) -> str:
    return path if path.startswith("/") else "/" + path


def sanitize_paths(raw: str) -> List[str]:
    """
    Turn the multi-line text an editor typed into a list of path templates.

    One path per line; blank lines are dropped, surrounding whitespace is
    trimmed and a leading slash is added where missing.
    """
    paths = []
    for line in _LINE_BREAK.split(raw.strip()):
        line = line.strip()
        if not line:
            continue
        paths.append(_with_leading_slash(line))
    return paths


def sanitize_settings(options: Any) -> Dict[str, Dict[str, List[str]]]:
    """
    Sanitize a submitted settings form into the stored settings shape.

    ``options["invalidation_paths"]`` maps content type to raw text. Values
    that are not strings (already converted lists, ``None``) are skipped, as
    are empty strings, so partial form submissions never error.
    """
    sanitized: Dict[str, Dict[str, List[str]]] = {}
    if not isinstance(options, dict):
        return sanitized

    raw_paths = options.get("invalidation_paths")
    if not isinstance(raw_paths, dict):
        return sanitized

    for content_type, paths_string in raw_paths.items():
        if not isinstance(paths_string, str) or not paths_string:
            continue
        paths = sanitize_paths(paths_string)
        if paths:
            sanitized.setdefault("invalidation_paths", {})[content_type] = paths

    return sanitized


class PathTemplateResolver:
    """Expand ``%id%`` and ``%slug%`` in a path template."""

    def resolve(self, template: str, item: ContentItem) -> str:
        content_id = str(item.id)
        path = template.replace(ID_PLACEHOLDER, content_id)
        # Items without a slug fall back to their id.
        path = path.replace(SLUG_PLACEHOLDER, item.slug or content_id)
        return _with_leading_slash(path)

    def resolve_all(self, templates: Sequence[str], item: ContentItem) -> List[str]:
        return [self.resolve(template, item) for template in templates]


class PathFilterRegistry:
    """
    Per content type path filters.

    A filter is called as ``func(paths, item)`` and returns the replacement
    list of path templates. Filters registered for the same content type run
    in registration order, each receiving the previous one's output. Content
    types without filters keep their configured paths.
    """

    def __init__(self):
        self._filters: Dict[str, List[PathFilter]] = {}

    def register(self, content_type: str, func: Optional[PathFilter] = None):
        if func is None:

            def decorator(f: PathFilter) -> PathFilter:
                self.register(content_type, f)
                return f

            return decorator

        self._filters.setdefault(content_type, []).append(func)
        return func

    def unregister(self, content_type: str, func: PathFilter) -> None:
        filters = self._filters.get(content_type, [])
        if func in filters:
            filters.remove(func)

    def filters_for(self, content_type: str) -> List[PathFilter]:
        return list(self._filters.get(content_type, []))

    def apply(self, content_type: str, paths: Sequence[str], item: ContentItem) -> List[str]:
        """
        Run the filters for a content type.

        Raises TypeError when a filter returns a bare string or anything other
        than a sequence. Entries that are not non-empty strings are dropped.
        """
        result = list(paths)
        for func in self.filters_for(content_type):
            output = func(list(result), item)
            if output is None:
                output = []
            if isinstance(output, (str, bytes)) or not isinstance(output, Sequence):
                raise TypeError(
                    f"Path filter {getattr(func, '__name__', func)!r} for {content_type!r} "
                    f"returned {type(output).__name__}, expected a list of paths"
                )
            result = [path for path in output if isinstance(path, str) and path]
            if len(result) != len(output):
                StructuredLogger.warning(
                    "Dropped malformed paths from filter",
                    content_type=content_type,
                    dropped=len(output) - len(result),
                )
        return result
