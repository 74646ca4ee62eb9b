"""Describe a path from its file-system metadata: directories, devices, links."""

from __future__ import annotations

import os
import stat
import sys

from .output import Flags, Output

__all__ = ["handle_mime", "describe_path"]

_BUFSIZ = 8192


def handle_mime(out: Output, kind: str) -> None:
    """Write the MIME form of an inode kind according to the output flags."""
    mime = out.flags & Flags.MIME
    if mime & Flags.MIME_TYPE:
        out.printf("inode/%s", kind)
        if mime & Flags.MIME_ENCODING:
            out.printf("; charset=")
    if mime & Flags.MIME_ENCODING:
        out.printf("binary")


def _bad_link(out: Output, err: int, target: str) -> bool:
    mime = out.flags & Flags.MIME
    if mime & Flags.MIME_TYPE:
        out.printf("inode/symlink")
    elif not mime:
        if out.flags & Flags.ERROR:
            out.error(f"broken symbolic link to {target}", err)
        out.printf("broken symbolic link to %s", target)
    return True


def _errno_of(exc: OSError) -> int:
    return exc.errno or 0


def describe_path(out: Output, path: str | None) -> bool:
    """Describe path from its metadata.

    Returns True if the path was fully described here and False if the
    contents still need to be examined. Errors raise MagicError when the
    ERROR flag is set.
    """
    if path is None:
        return False

    flags = out.flags
    mime = flags & Flags.MIME
    silent = bool(flags & (Flags.APPLE | Flags.EXTENSION))
    did = 0

    def comma() -> str:
        nonlocal did
        sep = ", " if did else ""
        did += 1
        return sep

    def note(kind: str, fmt: str, *args: object) -> None:
        if mime:
            handle_mime(out, kind)
        elif not silent:
            out.printf(fmt, comma(), *args)

    try:
        st = os.stat(path) if flags & Flags.SYMLINK else os.lstat(path)
    except OSError as exc:
        err = _errno_of(exc)
        if flags & Flags.ERROR:
            out.error(f"cannot stat `{path}'", err)
        out.printf("cannot open `%s' (%s)", path, os.strerror(err))
        return False

    handled = True
    mode = st.st_mode
    if not mime and not silent:
        for bit, word in ((stat.S_ISUID, "setuid"), (stat.S_ISGID, "setgid"),
                          (stat.S_ISVTX, "sticky")):
            if mode & bit:
                out.printf("%s%s", comma(), word)

    fmt = stat.S_IFMT(mode)
    if fmt == stat.S_IFDIR:
        note("directory", "%sdirectory")
    elif fmt == stat.S_IFCHR:
        if flags & Flags.DEVICES:
            handled = False
        else:
            note("chardevice", "%scharacter special (%d/%d)",
                 os.major(st.st_rdev), os.minor(st.st_rdev))
    elif fmt == stat.S_IFBLK:
        if flags & Flags.DEVICES:
            handled = False
        else:
            note("blockdevice", "%sblock special (%d/%d)",
                 os.major(st.st_rdev), os.minor(st.st_rdev))
    elif fmt == stat.S_IFIFO:
        if not flags & Flags.DEVICES:
            note("fifo", "%sfifo (named pipe)")
    elif stat.S_ISDOOR(mode):
        note("door", "%sdoor")
    elif fmt == stat.S_IFLNK:
        try:
            target = os.readlink(path)
            read_err = 0
        except OSError as exc:
            target = ""
            read_err = _errno_of(exc)
        if not target:
            if flags & Flags.ERROR:
                out.error(f"unreadable symlink `{path}'", read_err)
            note("symlink", "%sunreadable symlink `%s' (%s)", path,
                 os.strerror(read_err))
        else:
            if sys.platform.startswith("linux"):
                # procfs links such as pipe:[1234] cannot be resolved by name,
                # so stat the link itself.
                check = path
            elif target.startswith("/"):
                check = target
            else:
                slash = path.rfind("/")
                if slash < 0:
                    check = target
                elif slash + 1 > _BUFSIZ:
                    if flags & Flags.ERROR:
                        out.error(f"path too long: `{target}'", 0)
                    note("x-path-too-long", "%spath too long: `%s'", path)
                    check = None
                else:
                    check = path[:slash + 1] + target
            if check is not None:
                try:
                    os.stat(check)
                except OSError as exc:
                    return _bad_link(out, _errno_of(exc), target)
                note("symlink", "%ssymbolic link to %s", target)
    elif fmt == stat.S_IFSOCK:
        note("socket", "%ssocket")
    elif fmt == stat.S_IFREG:
        if not flags & Flags.DEVICES and st.st_size == 0:
            note("x-empty", "%sempty")
        else:
            handled = False
    else:
        out.error(f"invalid mode 0{mode:o}", 0)

    if not silent and not mime and did and not handled:
        out.printf(" ")
    if handled and silent:
        return False
    return handled