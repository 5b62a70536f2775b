"""Readers for paired image sequences: RGB-D (TUM, indexed) and stereo (EuRoC, KITTI)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from slamkit.mono_sequences import _first_number, _lines

__all__ = [
    "PairedSequence",
    "load_tum_rgbd",
    "indexed_rgbd_paths",
    "load_euroc_stereo",
    "load_kitti_stereo",
]


@dataclass
class PairedSequence:
    """Two aligned lists of image paths with one timestamp (seconds) per pair.

    For stereo data ``first`` holds the left images and ``second`` the right
    ones; for RGB-D data they hold the colour images and the depth maps.
    """

    first: list[Path] = field(default_factory=list)
    second: list[Path] = field(default_factory=list)
    timestamps: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.first) != len(self.second):
            raise ValueError("different number of images in the two streams")
        if len(self.first) != len(self.timestamps):
            raise ValueError("images and timestamps differ in length")

    def __len__(self) -> int:
        return len(self.timestamps)

    def __iter__(self) -> Iterator[tuple[Path, Path, float]]:
        return iter(zip(self.first, self.second, self.timestamps))


def load_tum_rgbd(association_file) -> PairedSequence:
    """Read a TUM association file of ``t_rgb rgb_path t_depth depth_path`` lines.

    Paths are returned as written, relative to the sequence directory; the
    colour timestamp is the one kept for each pair.
    """
    association_file = Path(association_file)
    rgb: list[Path] = []
    depth: list[Path] = []
    stamps: list[float] = []
    for line in _lines(association_file):
        fields = line.split()
        if len(fields) < 4:
            raise ValueError(
                f"{association_file}: expected two timestamps and two file names in {line!r}"
            )
        stamps.append(_first_number(line, association_file))
        rgb.append(Path(fields[1]))
        depth.append(Path(fields[3]))
    if not rgb:
        raise ValueError(f"no images found in {association_file}")
    return PairedSequence(rgb, depth, stamps)


def indexed_rgbd_paths(root, start_index: int, end_index: int) -> PairedSequence:
    """Colour and depth paths ``rgb_index/N.png`` and ``dep_index/N.png`` for N in [start, end).

    The frame index itself serves as the timestamp.
    """
    root = Path(root)
    indices = range(int(start_index), int(end_index))
    return PairedSequence(
        [root / "rgb_index" / f"{i}.png" for i in indices],
        [root / "dep_index" / f"{i}.png" for i in indices],
        [float(i) for i in indices],
    )


def load_euroc_stereo(left_dir, right_dir, times_file) -> PairedSequence:
    """Read a EuRoC times file of nanosecond names shared by both cameras."""
    left_dir, right_dir, times_file = Path(left_dir), Path(right_dir), Path(times_file)
    left: list[Path] = []
    right: list[Path] = []
    stamps: list[float] = []
    for line in _lines(times_file):
        left.append(left_dir / f"{line}.png")
        right.append(right_dir / f"{line}.png")
        stamps.append(_first_number(line, times_file) / 1e9)
    if not left:
        raise ValueError(f"no images in provided path {times_file}")
    return PairedSequence(left, right, stamps)


def load_kitti_stereo(sequence_dir) -> PairedSequence:
    """Read a KITTI sequence: times.txt with image_0 (left) and image_1 (right)."""
    sequence_dir = Path(sequence_dir)
    times_file = sequence_dir / "times.txt"
    stamps = [_first_number(line, times_file) for line in _lines(times_file)]
    names = [f"{i:06d}.png" for i in range(len(stamps))]
    return PairedSequence(
        [sequence_dir / "image_0" / name for name in names],
        [sequence_dir / "image_1" / name for name in names],
        stamps,
    )