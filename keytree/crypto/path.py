"""BIP32 derivation path parsing."""

import re
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

from ..constants import HARDENED
from ..exceptions import InvalidPath

__all__ = ["PathStep", "DerivationPath", "parse_path"]

SEGMENT_PATTERN = re.compile(r"([0-9]+)(')?")
ROOTS = ("m", "M")


@dataclass(frozen=True)
class PathStep:
    """Single derivation step."""

    index: int
    hardened: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.index < HARDENED:
            raise InvalidPath(f"Path index out of range: {self.index}")

    @classmethod
    def from_raw(cls, raw: int) -> "PathStep":
        """Build a step from a 32-bit index with the hardened bit."""
        return cls(raw & ~HARDENED & 0xFFFFFFFF, bool(raw & HARDENED))

    @property
    def raw(self) -> int:
        """Index as serialized, with the hardened bit applied."""
        return self.index | HARDENED if self.hardened else self.index

    def __str__(self) -> str:
        return f"{self.index}'" if self.hardened else str(self.index)


@dataclass(frozen=True)
class DerivationPath:
    """
    Ordered sequence of derivation steps anchored at the master node.

    ``root`` is ``m`` or ``M``. It records whether the path was written for a
    private or public context; derivation is the same either way.
    """

    steps: Tuple[PathStep, ...] = ()
    root: str = "m"

    def __post_init__(self) -> None:
        if self.root not in ROOTS:
            raise InvalidPath(f"Invalid path root: {self.root!r}")

    @classmethod
    def parse(cls, path: str) -> "DerivationPath":
        """
        Parse a path such as ``m/44'/0'/0'/0/1``.

        Raises:
            InvalidPath: If the path is empty or malformed
        """
        if not isinstance(path, str):
            raise InvalidPath(f"Path must be a string, got {type(path).__name__}")
        if not path:
            raise InvalidPath("Path is empty")

        root, *segments = path.split("/")
        if root not in ROOTS:
            raise InvalidPath(f"Invalid path root: {root!r}")

        steps = []
        for segment in segments:
            match = SEGMENT_PATTERN.fullmatch(segment)
            if match is None:
                raise InvalidPath(f"Invalid path segment: {segment!r}")

            index = int(match.group(1))
            if index >= HARDENED:
                raise InvalidPath(f"Path index out of range: {segment!r}")

            steps.append(PathStep(index, match.group(2) is not None))

        return cls(tuple(steps), root)

    @property
    def depth(self) -> int:
        return len(self.steps)

    def raw_indices(self) -> Tuple[int, ...]:
        """Serialized indices of each step."""
        return tuple(step.raw for step in self.steps)

    def child(self, index: int, hardened: bool = False) -> "DerivationPath":
        """Return a new path extended by one step."""
        return DerivationPath(self.steps + (PathStep(index, hardened),), self.root)

    def __truediv__(self, other: Union["DerivationPath", PathStep]) -> "DerivationPath":
        if isinstance(other, PathStep):
            return DerivationPath(self.steps + (other,), self.root)
        if isinstance(other, DerivationPath):
            return DerivationPath(self.steps + other.steps, self.root)
        return NotImplemented

    def __iter__(self) -> Iterator[PathStep]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __str__(self) -> str:
        return "/".join([self.root] + [str(step) for step in self.steps])


def parse_path(path: Union[str, DerivationPath]) -> DerivationPath:
    """Parse a path string; paths that are already parsed pass through."""
    if isinstance(path, DerivationPath):
        return path
    return DerivationPath.parse(path)
