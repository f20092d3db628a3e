"""
Swaps a downloaded binary into the place of the running executable.

The installed binary is first renamed to ``<target>.bak``, then the staging
file is renamed onto ``<target>``, then the backup is deleted. The target
path therefore always holds a binary, except for the short window between
the first two renames, where a failure restores the backup.

When the staging file lives on a different filesystem than the install
directory, rename fails with EXDEV and the bytes are copied instead. The copy
is not atomic: an interrupted copy can leave a truncated binary behind.
"""
import errno
import logging
import os
import shutil

from .release import EXECUTABLE_MODE, discard_file

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"


def backup_path(target: str) -> str:
    return target + BACKUP_SUFFIX


def replace_executable(staging: str, target: str) -> None:
    """
    Replace the binary at ``target`` with the file at ``staging``.

    Args:
        staging: Path of the downloaded, executable staging file.
        target: Path of the installed executable. Symlinks are resolved.

    Raises:
        PermissionError: the install location is not writable.
        OSError: any other filesystem failure. The original binary has
            been restored unless an error was logged saying otherwise.
    """
    target = os.path.realpath(target)
    backup = backup_path(target)

    logger.info(f"Moving {target} to {backup}")
    os.rename(target, backup)

    try:
        _move_into_place(staging, target)
    except BaseException as e:
        _restore_backup(backup, target, e)
        raise

    try:
        os.remove(backup)
    except OSError as e:
        logger.warning(f"Upgrade succeeded but the backup {backup} could not be removed: {e}")


def _move_into_place(staging: str, target: str) -> None:
    try:
        os.rename(staging, target)
        return
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
    logger.info(f"{staging} and {target} are on different filesystems, copying instead")
    shutil.copyfile(staging, target)
    os.chmod(target, EXECUTABLE_MODE)
    discard_file(staging)


def _restore_backup(backup: str, target: str, cause: BaseException) -> None:
    logger.info(f"Replacing {target} failed ({cause}), restoring {backup}")
    try:
        os.rename(backup, target)
    except OSError as e:
        logger.error(
            f"Could not restore the previous binary: {e}. "
            f"Recover manually with: mv '{backup}' '{target}'"
        )
