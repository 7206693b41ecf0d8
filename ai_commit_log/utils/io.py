from __future__ import annotations

from typing import TextIO

from ai_commit_log.errors import UsageError


def read_patch(stream: TextIO) -> str:
    """
    Read the whole patch from `stream`; empty input is a usage error.

    Bytes that are not valid UTF-8 (e.g. a diff of a latin-1 file) become U+FFFD
    so the patch can always be sent as JSON.
    """
    raw = getattr(stream, "buffer", None)
    data = raw.read() if raw is not None else stream.read()
    if isinstance(data, str):
        # Text streams opened with surrogateescape hand undecodable bytes back as lone surrogates.
        try:
            data = data.encode("utf-8", errors="surrogateescape")
        except UnicodeEncodeError:
            data = data.encode("utf-8", errors="replace")
    text = data.decode("utf-8", errors="replace")
    if not text.strip():
        raise UsageError("No patch provided. Pipe a git diff or patch content.")
    return text.rstrip("\r\n")
