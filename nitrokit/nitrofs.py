"""Read-only access to the NitroFS file system embedded in an NDS ROM image."""

from __future__ import annotations

import io
import os
import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional

ROOT_DIR_ID = 0xF000
_DIR_MASK = 0x0FFF
_IS_DIR = 0x80
_FNT_DIR_ENTRY = struct.Struct("<IHH")
_FAT_ENTRY = struct.Struct("<II")

# Offsets inside the cartridge header.
_HEADER_FNT_OFFSET = 0x40
_HEADER_FAT_OFFSET = 0x48
_HEADER_FAT_SIZE = 0x4C


class NitroError(OSError):
    """Raised when the ROM image cannot be read as a NitroFS image."""


@dataclass(frozen=True)
class DirEntry:
    """One name in a NitroFS directory."""

    name: str
    is_dir: bool
    dir_id: Optional[int] = None
    start: int = 0
    end: int = 0

    @property
    def size(self) -> int:
        return self.end - self.start


def _case_fold(name: str) -> str:
    return name.lower()


class NitroFile(io.RawIOBase):
    """A file inside the image; positions are relative to the file start."""

    def __init__(self, fileobj: BinaryIO, start: int, end: int) -> None:
        super().__init__()
        self._file = fileobj
        self.start = start
        self.end = end
        self._pos = start

    @property
    def size(self) -> int:
        return self.end - self.start

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes, never past the end of the file."""
        if self._pos > self.end:
            return b""
        remaining = self.end - self._pos
        if size is None or size < 0 or size > remaining:
            size = remaining
        if size == 0:
            return b""
        self._file.seek(self._pos)
        data = self._file.read(size)
        self._pos += len(data)
        return data

    def readall(self) -> bytes:
        return self.read(-1)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the position; seeking past the end raises ``OSError``."""
        if whence == os.SEEK_SET:
            target = self.start + offset
        elif whence == os.SEEK_END:
            target = self.end + offset
        elif whence == os.SEEK_CUR:
            target = self._pos + offset
        else:
            raise ValueError(f"invalid whence: {whence}")
        if target > self.end:
            raise OSError("seek past end of file")
        if target < self.start:
            raise OSError("seek before start of file")
        self._pos = target
        return self._pos - self.start

    def tell(self) -> int:
        return self._pos - self.start


class NitroFS:
    """A NitroFS directory tree read from a binary file object."""

    def __init__(self, fileobj: BinaryIO, fnt_offset: int, fat_offset: int) -> None:
        self._file = fileobj
        self.fnt_offset = fnt_offset
        self.fat_offset = fat_offset
        self._cwd = ROOT_DIR_ID

    @classmethod
    def from_rom(cls, fileobj: BinaryIO) -> "NitroFS":
        """Open the file system described by a ROM image's header."""
        fileobj.seek(0)
        header = fileobj.read(_HEADER_FAT_SIZE + 4)
        if len(header) < _HEADER_FAT_SIZE + 4:
            raise NitroError("ROM header is truncated")
        (fnt_offset,) = struct.unpack_from("<I", header, _HEADER_FNT_OFFSET)
        fat_offset, fat_size = struct.unpack_from("<II", header, _HEADER_FAT_OFFSET)
        if fat_size == 0:
            raise NitroError("ROM image holds no file allocation table")
        return cls(fileobj, fnt_offset, fat_offset)

    def _read_at(self, pos: int, size: int) -> bytes:
        self._file.seek(pos)
        data = self._file.read(size)
        if len(data) < size:
            raise NitroError(f"image truncated at offset {pos:#x}")
        return data

    def _iter_dir(self, dir_id: int) -> Iterator[DirEntry]:
        entry_start, file_id, parent_id = _FNT_DIR_ENTRY.unpack(
            self._read_at(self.fnt_offset + (dir_id & _DIR_MASK) * _FNT_DIR_ENTRY.size,
                          _FNT_DIR_ENTRY.size)
        )
        yield DirEntry(".", True, dir_id)
        yield DirEntry("..", True, dir_id if dir_id == ROOT_DIR_ID else parent_id)

        pos = self.fnt_offset + entry_start
        while True:
            length = self._read_at(pos, 1)[0]
            pos += 1
            if length == 0:
                return
            if length & _IS_DIR:
                length &= ~_IS_DIR & 0xFF
                name = self._read_at(pos, length).decode("latin-1")
                pos += length
                (sub_id,) = struct.unpack("<H", self._read_at(pos, 2))
                pos += 2
                yield DirEntry(name, True, sub_id)
            else:
                name = self._read_at(pos, length).decode("latin-1")
                pos += length
                top, bottom = _FAT_ENTRY.unpack(
                    self._read_at(self.fat_offset + file_id * _FAT_ENTRY.size, _FAT_ENTRY.size)
                )
                file_id += 1
                yield DirEntry(name, False, None, top, bottom)

    def _resolve_dir(self, path: str) -> Optional[int]:
        if ":" in path:
            path = path.split(":", 1)[1]
        current = ROOT_DIR_ID if path.startswith("/") else self._cwd
        for part in path.split("/"):
            if not part:
                continue
            wanted = _case_fold(part)
            for entry in self._iter_dir(current):
                if entry.is_dir and _case_fold(entry.name) == wanted:
                    current = entry.dir_id
                    break
            else:
                return None
        return current

    def _find_file(self, path: str) -> Optional[DirEntry]:
        split = max(path.rfind("/"), path.rfind(":"))
        if split >= 0:
            dir_part, name = path[: split + 1], path[split + 1:]
        else:
            dir_part, name = "", path
        dir_id = self._resolve_dir(dir_part)
        if dir_id is None:
            return None
        wanted = _case_fold(name)
        for entry in self._iter_dir(dir_id):
            if not entry.is_dir and _case_fold(entry.name) == wanted:
                return entry if entry.start else None
        return None

    def listdir(self, path: str = "") -> list[DirEntry]:
        """List a directory, starting with its "." and ".." entries."""
        dir_id = self._resolve_dir(path)
        if dir_id is None:
            raise FileNotFoundError(path)
        return list(self._iter_dir(dir_id))

    def open(self, path: str) -> NitroFile:
        """Open a file for reading; names match without regard to case."""
        entry = self._find_file(path)
        if entry is None:
            raise FileNotFoundError(path)
        return NitroFile(self._file, entry.start, entry.end)

    def stat(self, path: str) -> DirEntry:
        """Describe a file or directory."""
        name = path.rstrip("/").rsplit("/", 1)[-1].rsplit(":", 1)[-1]
        entry = self._find_file(path)
        if entry is not None:
            return entry
        dir_id = self._resolve_dir(path)
        if dir_id is not None:
            return DirEntry(name, True, dir_id)
        raise FileNotFoundError(path)

    def chdir(self, path: str) -> None:
        """Change the directory that relative paths start from."""
        if path is None:
            raise FileNotFoundError(path)
        dir_id = self._resolve_dir(path)
        if dir_id is None:
            raise FileNotFoundError(path)
        self._cwd = dir_id