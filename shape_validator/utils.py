"""
Utility classes and functions for the shape validator.
"""

import re
from typing import Any, Iterable, List, Union

Segment = Union[str, int]


class Path(tuple):
    """
    Immutable location of a value inside a validated structure.

    A path is a sequence of segments, each either a field name (str) or an
    index (int). Appending always returns a new path, so a path can be shared
    freely between recursive validation calls.
    """

    _TOKEN = re.compile(r"\[(\d+)\]|([^.\[\]]+)")

    def __new__(cls, segments: Iterable[Segment] = ()):
        segments = tuple(segments)
        for segment in segments:
            Path._check_segment(segment)
        return super().__new__(cls, segments)

    @staticmethod
    def _check_segment(segment: Any) -> None:
        if isinstance(segment, bool) or not isinstance(segment, (str, int)):
            raise TypeError(
                f"Path segments must be str or int, got {type(segment).__name__}")
        if isinstance(segment, int) and segment < 0:
            raise ValueError(f"Path indices must be non-negative, got {segment}")

    @classmethod
    def of(cls, *segments: Segment) -> "Path":
        """Build a path from positional segments."""
        return cls(segments)

    @classmethod
    def coerce(cls, path: Any) -> "Path":
        """
        Turn None, a single segment or a sequence of segments into a Path.

        Args:
            path: Path-like value

        Returns:
            Path instance
        """
        if path is None:
            return cls()
        if isinstance(path, Path):
            return path
        if isinstance(path, (str, int)) and not isinstance(path, bool):
            return cls((path,))
        return cls(path)

    def append(self, segment: Segment) -> "Path":
        """Return a new path with one more segment."""
        Path._check_segment(segment)
        return Path(tuple(self) + (segment,))

    def extend(self, segments: Iterable[Segment]) -> "Path":
        """Return a new path with all given segments appended."""
        return Path(tuple(self) + tuple(segments))

    def to_string(self) -> str:
        """
        Render the path for humans.

        Names join with '.', indices render as '[n]' right after the previous
        segment: ("user", "tags", 0, "name") -> "user.tags[0].name".

        Returns:
            Rendered path, empty string for the empty path
        """
        result = ""
        for segment in self:
            if isinstance(segment, int):
                result += f"[{segment}]"
            elif result:
                result += "." + segment
            else:
                result = segment
        return result

    @classmethod
    def parse(cls, text: str) -> "Path":
        """
        Parse a rendered path back into its segments.

        Only paths whose names contain none of '.', '[' or ']' survive the
        round trip.

        Args:
            text: Path rendered by to_string()

        Returns:
            Parsed path

        Raises:
            ValueError: If the text is not a rendered path
        """
        segments: List[Segment] = []
        pos = 0
        expect_name = True
        while pos < len(text):
            if text[pos] == "." and segments and not expect_name:
                pos += 1
                expect_name = True
                if pos == len(text):
                    raise ValueError(f"Invalid path: {text!r}")
                continue
            match = cls._TOKEN.match(text, pos)
            if match is None:
                raise ValueError(f"Invalid path: {text!r}")
            if match.group(1) is not None:
                if expect_name and segments:
                    raise ValueError(f"Invalid path: {text!r}")
                segments.append(int(match.group(1)))
            else:
                if not expect_name:
                    raise ValueError(f"Invalid path: {text!r}")
                segments.append(match.group(2))
            expect_name = False
            pos = match.end()
        return cls(segments)

    def to_pointer(self) -> str:
        """Render the path as an RFC 6901 JSON Pointer."""
        return JsonPointer.from_parts([str(segment) for segment in self])

    def base_field(self) -> str:
        """
        Rendered path up to (not including) the first index segment.

        ("tags", 0) -> "tags", ("users", 1, "name") -> "users", (0,) -> "".
        """
        for i, segment in enumerate(self):
            if isinstance(segment, int):
                return Path(self[:i]).to_string()
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Path({tuple(self)!r})"


class JsonPointer:
    """
    Utility class for handling JSON Pointers (RFC 6901).

    Used to give API consumers a standard rendering of failure paths.
    """

    @staticmethod
    def from_parts(parts: List[str]) -> str:
        """
        Create a JSON Pointer from path parts.

        Args:
            parts: List of path segments

        Returns:
            JSON Pointer string
        """
        if not parts:
            return ""

        return "/" + "/".join(JsonPointer.escape_part(part) for part in parts)

    @staticmethod
    def escape_part(part: str) -> str:
        # Replace ~ with ~0 and / with ~1
        return str(part).replace("~", "~0").replace("/", "~1")


class TypeUtils:
    """Utilities for describing runtime values in messages."""

    TYPE_NAMES = {
        type(None): "None",
        bool: "bool",
        int: "int",
        float: "float",
        str: "str",
        list: "list",
        tuple: "tuple",
        dict: "dict",
    }

    @staticmethod
    def get_type_name(value: Any) -> str:
        """
        Get a short type name for a value.

        Args:
            value: Any Python value

        Returns:
            Name used in "Expected X, got Y" messages
        """
        return TypeUtils.TYPE_NAMES.get(type(value), type(value).__name__)

    @staticmethod
    def is_integer(value: Any) -> bool:
        """True for int values, excluding bool."""
        return isinstance(value, int) and not isinstance(value, bool)

    @staticmethod
    def is_float(value: Any) -> bool:
        return isinstance(value, float)
