"""Output bundle: the buckets of one run and their collision handling.

A bucket accumulates the declarations that end up in one output file. The
bundle keeps buckets in creation order, which is also the order collisions
are resolved in.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterator
from dataclasses import dataclass, field

from unbundle.exceptions import CollisionWarning
from unbundle.utils import snake_case

logger = logging.getLogger(__name__)

COLLISION_PREFIX = '_'


@dataclass
class Bucket:
    """One output file in the making.

    Attributes:
        key: Bucket key, e.g. ``public_fns`` or a type name like ``Widget``.
        header: Package clause and import block, written once at the top.
        parts: Rendered declarations in the order they were added.
    """

    key: str
    header: str
    parts: list[str] = field(default_factory=list)

    def append(self, text: str) -> None:
        self.parts.append(text)

    @property
    def body(self) -> str:
        return ''.join(self.parts)

    @property
    def content(self) -> str:
        return self.header + self.body


@dataclass(frozen=True)
class Collision:
    """A bucket renamed because its file name matched another bucket's."""

    original: str
    renamed: str
    conflicts_with: str


@dataclass
class OutputBundle:
    """Ordered mapping of bucket keys to buckets."""

    buckets: dict[str, Bucket] = field(default_factory=dict)
    collisions: list[Collision] = field(default_factory=list)

    def __contains__(self, key: str) -> bool:
        return key in self.buckets

    def __getitem__(self, key: str) -> Bucket:
        return self.buckets[key]

    def __iter__(self) -> Iterator[Bucket]:
        return iter(self.buckets.values())

    def __len__(self) -> int:
        return len(self.buckets)

    def keys(self) -> list[str]:
        return list(self.buckets)

    def add(self, key: str, header: str, text: str) -> Bucket:
        """Append ``text`` to bucket ``key``, creating it with ``header`` first.

        The header is only used when the bucket does not exist yet.
        """
        bucket = self.buckets.get(key)
        if bucket is None:
            logger.debug(f'Creating bucket {key!r}')
            bucket = self.buckets[key] = Bucket(key=key, header=header)
        bucket.append(text)
        return bucket

    def contents(self) -> dict[str, str]:
        return {key: bucket.content for key, bucket in self.buckets.items()}


def resolve_collisions(bundle: OutputBundle) -> OutputBundle:
    """Rename buckets whose keys would be written to the same file.

    Keys are compared by their snake case file name, which also folds letter
    case, in bundle order. A key matching an earlier one is prefixed with
    ``_`` until it is unique; both buckets are kept. Every rename is logged
    and issued as a ``CollisionWarning``.

    Args:
        bundle: The populated bundle. It is not modified.

    Returns:
        A new bundle whose keys map to distinct file names.
    """
    resolved = OutputBundle(collisions=list(bundle.collisions))
    seen: dict[str, str] = {}
    reserved = {snake_case(key) for key in bundle.buckets}

    for key, bucket in bundle.buckets.items():
        new_key = key
        while snake_case(new_key) in seen or (
            new_key != key and snake_case(new_key) in reserved
        ):
            new_key = COLLISION_PREFIX + new_key

        if new_key != key:
            conflict = seen.get(snake_case(key), key)
            message = (
                f'Duplicate key {key!r} collides with {conflict!r}, '
                f'writing it as {new_key!r}'
            )
            logger.warning(message)
            warnings.warn(message, CollisionWarning, stacklevel=2)
            resolved.collisions.append(
                Collision(original=key, renamed=new_key, conflicts_with=conflict)
            )

        seen[snake_case(new_key)] = new_key
        resolved.buckets[new_key] = Bucket(
            key=new_key, header=bucket.header, parts=list(bucket.parts)
        )

    return resolved
