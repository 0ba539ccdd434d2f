"""Tests for splitting changed paths at the watch root."""

import pytest

from rsyncwatch.config.models import RelativizeStrategy
from rsyncwatch.core.relativizer import PathRelativizer


@pytest.mark.parametrize("suffix", [
    "x.txt",
    "dir/y.txt",
    "a/b/c/d.bin",
    "with space/and-dash.txt",
    "dir/",
])
def test_relative_path_reconstructs_original(suffix):
    root = "/a/"
    change = PathRelativizer(root).relativize(root + suffix)

    assert change.root == root
    assert change.relative_path == suffix
    assert change.root + change.relative_path == root + suffix
    assert change.absolute_path == root + suffix


@pytest.mark.parametrize("suffix", ["x.txt", "dir/y.txt", "deep/er/file"])
def test_destination_mirrors_suffix(suffix):
    change = PathRelativizer("/a/").relativize("/a/" + suffix)

    assert change.destination_for("/b/") == "/b/" + suffix


def test_marker_inserted_after_root():
    change = PathRelativizer("/a/").relativize("/a/dir/y.txt")

    assert change.marked_path == "/a/./dir/y.txt"


def test_prefix_strategy_marks_only_the_root_boundary():
    relativizer = PathRelativizer("/data/", RelativizeStrategy.PREFIX)

    change = relativizer.relativize("/data/backup/data/x.txt")

    assert change.marked_path == "/data/./backup/data/x.txt"
    assert change.relative_path == "backup/data/x.txt"


def test_substitute_strategy_marks_every_occurrence():
    relativizer = PathRelativizer("/data/", RelativizeStrategy.SUBSTITUTE)

    change = relativizer.relativize("/data/backup/data/x.txt")

    assert change.marked_path == "/data/./backup/data/./x.txt"
    # the split itself is still taken at the root prefix
    assert change.relative_path == "backup/data/x.txt"


def test_strategies_agree_without_repeated_root():
    path = "/srv/site/assets/app.css"
    prefix = PathRelativizer("/srv/site/", RelativizeStrategy.PREFIX).relativize(path)
    substitute = PathRelativizer("/srv/site/", RelativizeStrategy.SUBSTITUTE).relativize(path)

    assert prefix == substitute


@pytest.mark.parametrize("path", [
    "/other/x.txt",
    "/ab/x.txt",
    "/a/",
    "/a",
])
def test_paths_not_below_root_are_rejected(path):
    with pytest.raises(ValueError):
        PathRelativizer("/a/").relativize(path)


def test_empty_root_is_rejected():
    with pytest.raises(ValueError):
        PathRelativizer("")
