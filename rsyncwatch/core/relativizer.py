"""
Path relativization

Rewrites an absolute changed path so that ``rsync --relative`` mirrors
only the part below the watch root. The boundary is marked by a ``./``
component, e.g. ``/src/./dir/file.txt`` transfers ``dir/file.txt``.
"""

from dataclasses import dataclass

from rsyncwatch.config.models import RelativizeStrategy

RELATIVE_MARKER = "./"


@dataclass(frozen=True)
class RelativeChange:
    """A changed path split at the watch root"""
    root: str
    relative_path: str
    marked_path: str

    @property
    def absolute_path(self) -> str:
        return self.root + self.relative_path

    def destination_for(self, dest_root: str) -> str:
        """Path the transfer reproduces under ``dest_root``"""
        return dest_root + self.relative_path


class PathRelativizer:
    """
    Splits changed paths at a watch root.

    ``PREFIX`` cuts the path at the root's length, so the marker is
    inserted exactly once. ``SUBSTITUTE`` reproduces a global textual
    replacement: every occurrence of the root inside the path gets a
    marker, which differs from ``PREFIX`` when the root text repeats
    further down (``/data/`` in ``/data/backup/data/x``).
    """

    def __init__(self, root: str, strategy: RelativizeStrategy = RelativizeStrategy.PREFIX):
        if not root:
            raise ValueError("Watch root must not be empty")
        self.root = root
        self.strategy = strategy

    def relativize(self, path: str) -> RelativeChange:
        """
        Split ``path`` at the watch root.

        Args:
            path: Absolute path of the changed entry

        Returns:
            RelativeChange whose root + relative_path equals ``path``

        Raises:
            ValueError: if ``path`` does not lie strictly below the root
        """
        if not path.startswith(self.root) or len(path) == len(self.root):
            raise ValueError(f"{path!r} is not below watch root {self.root!r}")

        relative_path = path[len(self.root):]

        if self.strategy == RelativizeStrategy.SUBSTITUTE:
            marked_path = path.replace(self.root, self.root + RELATIVE_MARKER)
        else:
            marked_path = self.root + RELATIVE_MARKER + relative_path

        return RelativeChange(
            root=self.root,
            relative_path=relative_path,
            marked_path=marked_path,
        )
