"""Render a mutated SourceFile back to Go source and persist it.

Rendering splices the original bytes: only the spans whose model values
changed are rewritten, so comments and layout everywhere else survive
untouched. ``gofmt`` can be run afterwards for canonical formatting.
"""

import difflib
import shutil
import subprocess
from pathlib import Path

from ctxfix.errors import PersistError, PrintError

from .model import FuncDecl, SourceFile

Edit = tuple[int, int, bytes]


def _param_removal_edits(decl: FuncDecl) -> list[Edit]:
    """Deletion spans for removed parameters, separators included.

    A run of removed parameters is deleted up to the start of the next kept
    one; a trailing run is deleted from the end of the last kept one. That
    keeps ``(a, b)`` punctuation and any trailing comma layout intact.
    """
    original = decl.original_params
    kept = {id(p) for p in decl.params}
    edits = []

    i = 0
    while i < len(original):
        if id(original[i]) in kept:
            i += 1
            continue
        j = i
        while j < len(original) and id(original[j]) not in kept:
            j += 1

        run_start = original[i].span[0]
        run_end = original[j - 1].span[1]
        if j < len(original):
            edits.append((run_start, original[j].span[0], b""))
        elif i > 0:
            edits.append((original[i - 1].span[1], run_end, b""))
        else:
            edits.append((run_start, run_end, b""))
        i = j

    return edits


def collect_edits(file: SourceFile) -> list[Edit]:
    """Turn model changes into sorted, non-overlapping byte edits."""
    edits: list[Edit] = []

    for imp in file.imports:
        if imp.changed:
            edits.append((imp.span[0], imp.span[1], f'"{imp.path}"'.encode()))

    for decl in file.funcs:
        edits.extend(_param_removal_edits(decl))
        for ident in decl.idents:
            if ident.changed:
                edits.append((ident.span[0], ident.span[1], ident.name.encode()))

    edits.sort(key=lambda e: (e[0], e[1]))
    for prev, cur in zip(edits, edits[1:]):
        if cur[0] < prev[1]:
            raise PrintError(
                f"{file.path}: overlapping edits at bytes {prev[0]}-{prev[1]} and {cur[0]}-{cur[1]}"
            )
    return edits


def render(file: SourceFile) -> bytes:
    """Render the current state of a SourceFile to Go source bytes."""
    out = bytearray(file.source)
    for start, end, replacement in reversed(collect_edits(file)):
        out[start:end] = replacement
    return bytes(out)


def gofmt(data: bytes, path: Path | str, timeout: int = 30) -> bytes:
    """Pipe rendered source through the gofmt binary.

    Raises:
        PrintError: If gofmt is missing, times out or rejects the source
    """
    binary = shutil.which("gofmt")
    if binary is None:
        raise PrintError("gofmt requested but not found on PATH")

    try:
        result = subprocess.run(
            [binary],
            input=data,
            capture_output=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise PrintError(f"gofmt timed out after {timeout}s on {path}") from e

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise PrintError(f"gofmt failed on {path}: {stderr}")
    return result.stdout


def write_file(path: Path | str, data: bytes) -> None:
    """Overwrite path with data, keeping the file's existing permissions."""
    try:
        Path(path).write_bytes(data)
    except OSError as e:
        raise PersistError(path, e.strerror or str(e)) from e


def unified_diff(file: SourceFile, data: bytes) -> str:
    """Unified diff between the file as read and the rendered output."""
    before = file.source.decode("utf-8", errors="replace").splitlines(keepends=True)
    after = data.decode("utf-8", errors="replace").splitlines(keepends=True)
    return "".join(
        difflib.unified_diff(before, after, fromfile=f"a/{file.name}", tofile=f"b/{file.name}")
    )
