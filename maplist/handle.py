"""Centralized parsing and comparison of logical resource ids.

Logical ids are slash-delimited paths into the host's resource namespace,
independent of where the resource is stored on disk:

| Form      | Example               | Used In                      |
|-----------|-----------------------|------------------------------|
| Rooted    | `/Game/Maps/Arena`    | game-style mounts, CLI input |
| Relative  | `A/X`                 | manifests, tests             |

All code paths that need to parse ids or compare them against a prefix
should use this module.
"""

import re
from dataclasses import dataclass, field

from maplist.constants import ID_SEPARATOR
from maplist.exceptions import MalformedIdError, OutOfScopeError

# Characters no segment may contain (path separators of other systems,
# wildcards, and control characters)
_ILLEGAL_CHARS = re.compile(r'[\\:*?"<>|\x00-\x1f\x7f]')

_RESERVED_SEGMENTS = (".", "..")


@dataclass(frozen=True)
class ParsedId:
    """Parsed logical id.

    Attributes:
        segments: Path segments in their original casing
        rooted: True when the id was written with a leading slash
    """

    segments: tuple[str, ...] = field(default_factory=tuple)
    rooted: bool = False

    @property
    def name(self) -> str:
        """The leaf segment, used as a display name."""
        return self.segments[-1]

    @property
    def folded(self) -> tuple[str, ...]:
        """Case-folded segments for comparisons."""
        return tuple(s.casefold() for s in self.segments)

    def to_id(self) -> str:
        """Render back to the canonical string form.

        Examples:
            >>> parse_logical_id("/Game/Maps/Arena").to_id()
            '/Game/Maps/Arena'
            >>> parse_logical_id("A/X").to_id()
            'A/X'
        """
        text = ID_SEPARATOR.join(self.segments)
        return f"{ID_SEPARATOR}{text}" if self.rooted else text

    def is_below(self, root: "ParsedId") -> bool:
        """Check whether this id lies strictly below ``root``.

        The comparison is case-insensitive and works on whole segments, so
        ``A`` covers ``A/X`` but not ``AB/X`` and not ``A`` itself.

        Examples:
            >>> parse_logical_id("/game/maps/Arena").is_below(parse_logical_id("/Game"))
            True
            >>> parse_logical_id("AB/X").is_below(parse_logical_id("A"))
            False
        """
        if self.rooted != root.rooted:
            return False
        if len(self.segments) <= len(root.segments):
            return False
        return self.folded[: len(root.segments)] == root.folded

    def relative_to(self, root: "ParsedId") -> tuple[str, ...]:
        """Segments of this id below ``root``.

        Raises:
            OutOfScopeError: If this id is not below ``root``
        """
        if not self.is_below(root):
            raise OutOfScopeError(
                f"'{self.to_id()}' is not within namespace '{root.to_id()}'"
            )
        return self.segments[len(root.segments):]


def parse_logical_id(raw: str) -> ParsedId:
    """Parse and validate a logical id.

    Args:
        raw: The id string, e.g. "/Game/Maps/Arena" or "A/X"

    Returns:
        ParsedId with validated segments

    Raises:
        MalformedIdError: If the id is empty, has a trailing slash, an empty
            or reserved segment, or an illegal character
    """
    if not raw or not raw.strip():
        raise MalformedIdError("Logical id cannot be empty")

    rooted = raw.startswith(ID_SEPARATOR)
    body = raw[1:] if rooted else raw

    if not body:
        raise MalformedIdError(f"Invalid logical id '{raw}': no segments")
    if body.endswith(ID_SEPARATOR):
        raise MalformedIdError(f"Invalid logical id '{raw}': trailing '/'")

    segments = body.split(ID_SEPARATOR)
    for segment in segments:
        if not segment:
            raise MalformedIdError(f"Invalid logical id '{raw}': contains empty path segments")
        if segment in _RESERVED_SEGMENTS or segment.strip() != segment:
            raise MalformedIdError(f"Invalid logical id '{raw}': bad segment '{segment}'")
        if _ILLEGAL_CHARS.search(segment):
            raise MalformedIdError(f"Invalid logical id '{raw}': illegal character in '{segment}'")

    return ParsedId(segments=tuple(segments), rooted=rooted)


def parse_prefix(raw: str) -> ParsedId:
    """Parse a namespace prefix, tolerating trailing slashes.

    Examples:
        >>> parse_prefix("/Game/").to_id()
        '/Game'
    """
    trimmed = raw.rstrip(ID_SEPARATOR) if raw else raw
    if raw and not trimmed:
        raise MalformedIdError(f"Invalid prefix '{raw}': no segments")
    return parse_logical_id(trimmed)


def leaf_name(raw: str) -> str:
    """Best-effort leaf segment of a possibly malformed id.

    Examples:
        >>> leaf_name("/Game/Maps/Arena")
        'Arena'
        >>> leaf_name("A//X/")
        'X'
    """
    parts = [p for p in raw.split(ID_SEPARATOR) if p]
    return parts[-1] if parts else raw


def textually_under(raw: str, prefix: ParsedId) -> bool:
    """Prefix check on a raw string that may not parse as an id.

    Used to decide whether a malformed registry row belongs to a prefix.
    """
    head = prefix.to_id().casefold() + ID_SEPARATOR
    return raw.casefold().startswith(head)
