from pathlib import Path

import pytest

from slamkit.stereo_sequences import (
    PairedSequence,
    indexed_rgbd_paths,
    load_euroc_stereo,
    load_kitti_stereo,
    load_tum_rgbd,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_paired_sequence_rejects_stream_mismatch():
    with pytest.raises(ValueError):
        PairedSequence([Path("a.png")], [], [0.0])


def test_paired_sequence_rejects_timestamp_mismatch():
    with pytest.raises(ValueError):
        PairedSequence([Path("a.png")], [Path("b.png")], [])


def test_paired_sequence_iterates_triples():
    seq = PairedSequence([Path("l.png")], [Path("r.png")], [1.5])
    assert list(seq) == [(Path("l.png"), Path("r.png"), 1.5)]
    assert len(seq) == 1


def test_load_tum_rgbd_parses_association(tmp_path):
    assoc = _write(
        tmp_path / "assoc.txt",
        "1305031102.175304 rgb/1305031102.175304.png 1305031102.160407 depth/1305031102.160407.png\n"
        "\n"
        "1305031102.211214 rgb/1305031102.211214.png 1305031102.226738 depth/1305031102.226738.png\n",
    )
    seq = load_tum_rgbd(assoc)
    assert len(seq) == 2
    assert seq.first == [
        Path("rgb/1305031102.175304.png"),
        Path("rgb/1305031102.211214.png"),
    ]
    assert seq.second[1] == Path("depth/1305031102.226738.png")
    assert seq.timestamps == [1305031102.175304, 1305031102.211214]


def test_load_tum_rgbd_empty_file_raises(tmp_path):
    assoc = _write(tmp_path / "assoc.txt", "\n\n")
    with pytest.raises(ValueError):
        load_tum_rgbd(assoc)


def test_load_tum_rgbd_malformed_line_raises(tmp_path):
    assoc = _write(tmp_path / "assoc.txt", "1.0 rgb/1.png\n")
    with pytest.raises(ValueError):
        load_tum_rgbd(assoc)


def test_load_tum_rgbd_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_tum_rgbd(tmp_path / "missing.txt")


def test_indexed_rgbd_paths_layout(tmp_path):
    seq = indexed_rgbd_paths(tmp_path, 2, 5)
    assert len(seq) == 3
    assert seq.first[0] == tmp_path / "rgb_index" / "2.png"
    assert seq.second[-1] == tmp_path / "dep_index" / "4.png"
    assert seq.timestamps == [2.0, 3.0, 4.0]


def test_indexed_rgbd_paths_empty_range(tmp_path):
    seq = indexed_rgbd_paths(tmp_path, 5, 5)
    assert len(seq) == 0
    assert list(seq) == []


def test_load_euroc_stereo(tmp_path):
    times = _write(tmp_path / "times.txt", "1403636579763555584\n1403636579813555456\n")
    left, right = tmp_path / "cam0", tmp_path / "cam1"
    seq = load_euroc_stereo(left, right, times)
    assert seq.first == [
        left / "1403636579763555584.png",
        left / "1403636579813555456.png",
    ]
    assert seq.second[0] == right / "1403636579763555584.png"
    assert seq.timestamps[0] == pytest.approx(1403636579.763555584)
    assert seq.timestamps == sorted(seq.timestamps)


def test_load_euroc_stereo_empty_raises(tmp_path):
    times = _write(tmp_path / "times.txt", "")
    with pytest.raises(ValueError):
        load_euroc_stereo(tmp_path / "l", tmp_path / "r", times)


def test_load_kitti_stereo(tmp_path):
    _write(tmp_path / "times.txt", "0.000000e+00\n1.036914e-01\n2.072834e-01\n")
    seq = load_kitti_stereo(tmp_path)
    assert len(seq) == 3
    assert seq.first[0] == tmp_path / "image_0" / "000000.png"
    assert seq.second[2] == tmp_path / "image_1" / "000002.png"
    assert seq.timestamps == [0.0, 1.036914e-01, 2.072834e-01]
    assert [p.name for p in seq.first] == [p.name for p in seq.second]


def test_load_kitti_stereo_bad_timestamp_raises(tmp_path):
    _write(tmp_path / "times.txt", "not-a-number\n")
    with pytest.raises(ValueError):
        load_kitti_stereo(tmp_path)