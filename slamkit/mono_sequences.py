"""Readers for monocular image sequences in the EuRoC, KITTI and TUM layouts."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

__all__ = ["MonoSequence", "load_euroc_mono", "load_kitti_mono", "load_tum_mono"]


@dataclass
class MonoSequence:
    """Image paths with their timestamps in seconds, in recording order."""

    images: list[Path] = field(default_factory=list)
    timestamps: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.images) != len(self.timestamps):
            raise ValueError("images and timestamps differ in length")

    def __len__(self) -> int:
        return len(self.images)

    def __iter__(self) -> Iterator[tuple[Path, float]]:
        return iter(zip(self.images, self.timestamps))


def _lines(path: Path, skip: int = 0) -> Iterator[str]:
    with open(path, encoding="utf-8") as handle:
        for number, raw in enumerate(handle):
            if number < skip:
                continue
            line = raw.rstrip("\r\n")
            if line:
                yield line


def _first_number(line: str, path: Path) -> float:
    try:
        return float(line.split()[0])
    except (IndexError, ValueError) as exc:
        raise ValueError(f"{path}: bad timestamp in line {line!r}") from exc


def load_euroc_mono(image_dir, times_file) -> MonoSequence:
    """Read a EuRoC times file whose lines are nanosecond image names."""
    image_dir, times_file = Path(image_dir), Path(times_file)
    images: list[Path] = []
    stamps: list[float] = []
    for line in _lines(times_file):
        images.append(image_dir / f"{line}.png")
        stamps.append(_first_number(line, times_file) / 1e9)
    if not images:
        raise ValueError(f"failed to load images from {times_file}")
    return MonoSequence(images, stamps)


def load_kitti_mono(sequence_dir) -> MonoSequence:
    """Read a KITTI sequence: times.txt plus image_0/NNNNNN.png files."""
    sequence_dir = Path(sequence_dir)
    times_file = sequence_dir / "times.txt"
    stamps = [_first_number(line, times_file) for line in _lines(times_file)]
    images = [sequence_dir / "image_0" / f"{i:06d}.png" for i in range(len(stamps))]
    return MonoSequence(images, stamps)


def load_tum_mono(sequence_dir) -> MonoSequence:
    """Read a TUM sequence from rgb.txt, skipping its three header lines."""
    sequence_dir = Path(sequence_dir)
    list_file = sequence_dir / "rgb.txt"
    images: list[Path] = []
    stamps: list[float] = []
    for line in _lines(list_file, skip=3):
        fields = line.split()
        if len(fields) < 2:
            raise ValueError(f"{list_file}: expected timestamp and file name in {line!r}")
        stamps.append(_first_number(line, list_file))
        images.append(sequence_dir / fields[1])
    return MonoSequence(images, stamps)