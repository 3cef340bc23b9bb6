"""Output placement policies.

A single ``PlacementMode`` value decides where the shrunk copy of every input
file is written:

- ``InPlace``: the original is replaced.
- ``Rename``: ``scan.pdf`` becomes ``scan.shrunk.pdf`` next to the original.
- ``Subdir``: the file keeps its name and is written into another directory.

In every mode the engine writes to a hidden temporary sibling of the output
(see ``work_path``), which is moved into place only once the engine has
succeeded. Files already at the output path are never touched by a failed run.

Everything in this module is pure path arithmetic except
``ensure_output_dir``, which is only called when a command is really executed.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from pdfshrink.constants import DEFAULT_RENAME_SUFFIX, TEMP_SUFFIX
from pdfshrink.exceptions import (
    DirectoryCreationError,
    InputNotFoundError,
    MutuallyExclusiveOptionsError,
    NamingCollisionError,
)


@dataclass(frozen=True, slots=True)
class InPlace:
    """Replace the original file."""

    def describe(self) -> str:
        return "inplace"


@dataclass(frozen=True, slots=True)
class Rename:
    """Write ``<stem>.<suffix><ext>`` next to the original."""

    suffix: str = DEFAULT_RENAME_SUFFIX

    def describe(self) -> str:
        return f"rename (*.{self.suffix}.*)"


@dataclass(frozen=True, slots=True)
class Subdir:
    """Write ``<path>/<name>``."""

    path: Path

    def describe(self) -> str:
        return f"subdir = {str(self.path)!r}"


PlacementMode = InPlace | Rename | Subdir


def placement_from_flags(
    inplace: bool = False,
    rename: bool = False,
    subdir: Path | None = None,
    suffix: str = DEFAULT_RENAME_SUFFIX,
) -> PlacementMode:
    """Fold the three placement flags into one mode.

    Args:
        inplace: ``--inplace`` was given
        rename: ``--rename`` was given
        subdir: Value of ``--subdir``, if given
        suffix: Tag used by the rename policy

    Returns:
        The selected mode; ``Rename`` when no flag is set.

    Raises:
        MutuallyExclusiveOptionsError: If more than one flag is set.
    """
    selected = [
        name
        for name, present in (
            ("--inplace", inplace),
            ("--rename", rename),
            ("--subdir", subdir is not None),
        )
        if present
    ]
    if len(selected) > 1:
        raise MutuallyExclusiveOptionsError(selected)

    if inplace:
        return InPlace()
    if subdir is not None:
        return Subdir(Path(subdir))
    return Rename(suffix)


def with_suffix_tag(input_path: Path, suffix: str) -> Path:
    """Insert ``.<suffix>`` before the extension of ``input_path``.

    Examples:
        >>> with_suffix_tag(Path("dir/scan.pdf"), "shrunk")
        PosixPath('dir/scan.shrunk.pdf')
        >>> with_suffix_tag(Path("dir/scan"), "shrunk")
        PosixPath('dir/scan.shrunk')
    """
    tag = f".{suffix}" if suffix else ""
    return input_path.with_name(f"{input_path.stem}{tag}{input_path.suffix}")


def check_input(input_path: Path) -> None:
    """Raise ``InputNotFoundError`` unless ``input_path`` is a regular file."""
    if not input_path.is_file():
        raise InputNotFoundError(input_path)


def resolve_output(input_path: Path, mode: PlacementMode) -> Path:
    """Compute the destination of the shrunk copy of ``input_path``.

    Args:
        input_path: File to shrink
        mode: Placement policy

    Returns:
        Output path. Equal to ``input_path`` only for ``InPlace``.

    Raises:
        NamingCollisionError: If a rename or subdir output aliases the input.
    """
    if isinstance(mode, InPlace):
        output = input_path
    elif isinstance(mode, Rename):
        output = with_suffix_tag(input_path, mode.suffix)
        if output == input_path:
            raise NamingCollisionError(input_path, output)
    elif isinstance(mode, Subdir):
        output = mode.path / input_path.name
        if output.resolve() == input_path.resolve():
            raise NamingCollisionError(input_path, output)
    else:
        raise TypeError(f"Unknown placement mode: {mode!r}")

    logger.trace(f"resolve_output({input_path!s}, {mode.describe()}) = {output!s}")
    return output


def output_directory(input_path: Path, mode: PlacementMode) -> Path:
    """Return the directory the output of ``input_path`` lands in."""
    if isinstance(mode, Subdir):
        return mode.path
    return input_path.parent


def work_path(output_path: Path) -> Path:
    """Return the hidden sibling of ``output_path`` the engine writes to.

    Examples:
        >>> work_path(Path("dir/scan.shrunk.pdf"))
        PosixPath('dir/.scan.shrunk.pdf.tmp')
    """
    return output_path.with_name(f".{output_path.name}{TEMP_SUFFIX}")


def ensure_output_dir(input_path: Path, mode: PlacementMode) -> Path:
    """Create the output directory for subdir mode.

    An existing directory is fine.

    Raises:
        DirectoryCreationError: If the directory cannot be created.
    """
    directory = output_directory(input_path, mode)
    if isinstance(mode, Subdir):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationError(input_path, directory, e) from e
    return directory
