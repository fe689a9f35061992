from __future__ import annotations

from typing import Sequence, Union


COLLECTION_USERS = "users"
COLLECTION_POSTS = "posts"
COLLECTION_INFOS = "infos"

PATH_SEPARATOR = "/"


class PathError(ValueError):
    """Raised when a path does not match the shape an operation expects."""


def normalize_segment(segment: object) -> str:
    if not isinstance(segment, str):
        raise PathError(f"Path segment must be str: {segment!r}")
    if not segment:
        raise PathError("Path segment must not be empty.")
    if PATH_SEPARATOR in segment:
        raise PathError(f"Path segment must not contain '{PATH_SEPARATOR}': {segment}")
    return segment


def split_path(path: str) -> tuple[str, ...]:
    parts = path.strip(PATH_SEPARATOR).split(PATH_SEPARATOR)
    return tuple(normalize_segment(part) for part in parts)


def normalize_path(path: PathLike) -> tuple[str, ...]:
    if isinstance(path, (CollectionPath, DocumentPath)):
        return path.segments
    if isinstance(path, str):
        segments = split_path(path)
    else:
        segments = tuple(normalize_segment(segment) for segment in path)
    if len(segments) == 0:
        raise PathError("Path must have at least one segment.")
    return segments


def is_collection_path(segments: Sequence[str]) -> bool:
    return len(segments) % 2 == 1


def collection_segments(path: PathLike) -> tuple[str, ...]:
    segments = normalize_path(path)
    if not is_collection_path(segments):
        raise PathError(f"Collection path must have odd segments: {format_path(segments)}")
    return segments


def document_segments(path: PathLike) -> tuple[str, ...]:
    segments = normalize_path(path)
    if is_collection_path(segments):
        raise PathError(f"Document path must have even segments: {format_path(segments)}")
    return segments


def format_path(segments: Sequence[str]) -> str:
    return PATH_SEPARATOR.join(segments)


class _TypedPath:
    __slots__ = ("_segments",)

    def __init__(self, segments: tuple[str, ...]) -> None:
        self._segments = segments

    @property
    def segments(self) -> tuple[str, ...]:
        return self._segments

    @property
    def id(self) -> str:
        return self._segments[-1]

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self):
        return iter(self._segments)

    def __str__(self) -> str:
        return format_path(self._segments)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._segments == other._segments

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._segments))


class CollectionPath(_TypedPath):
    """Path ending on a collection (odd number of segments).

    `CollectionPath("users").document("u1").collection("posts")` builds the same
    path as `CollectionPath("users", "u1", "posts")`.
    """

    __slots__ = ()

    def __init__(self, *segments: str) -> None:
        super().__init__(collection_segments(segments))

    @classmethod
    def parse(cls, path: PathLike) -> CollectionPath:
        return cls(*collection_segments(path))

    @property
    def parent(self) -> DocumentPath | None:
        if len(self._segments) == 1:
            return None
        return DocumentPath(*self._segments[:-1])

    def document(self, document_id: str) -> DocumentPath:
        return DocumentPath(*self._segments, document_id)


class DocumentPath(_TypedPath):
    """Path ending on a document (even number of segments)."""

    __slots__ = ()

    def __init__(self, *segments: str) -> None:
        super().__init__(document_segments(segments))

    @classmethod
    def parse(cls, path: PathLike) -> DocumentPath:
        return cls(*document_segments(path))

    @property
    def parent(self) -> CollectionPath:
        return CollectionPath(*self._segments[:-1])

    def collection(self, name: str) -> CollectionPath:
        return CollectionPath(*self._segments, name)


PathLike = Union[CollectionPath, DocumentPath, str, Sequence[str]]
