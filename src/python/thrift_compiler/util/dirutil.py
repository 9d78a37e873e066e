# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import errno
import os
import shutil
import uuid
from contextlib import contextmanager
from typing import Iterator


def safe_mkdir_for(path: str) -> None:
    """Ensure that the parent directory for a file is present."""
    dirname = os.path.dirname(path)
    if dirname:
        os.makedirs(dirname, exist_ok=True)


def safe_delete(filename: str) -> None:
    """Delete a file safely.

    If it's not present, no-op.
    """
    try:
        os.unlink(filename)
    except OSError as e:
        if e.errno != errno.ENOENT:
            raise


@contextmanager
def safe_concurrent_creation(target_path: str) -> Iterator[str]:
    """Yields a temporary path that is renamed over `target_path` when the block exits cleanly.

    Concurrent writers each get their own temporary path; the last rename wins, so the target is
    never observed half written.
    """
    safe_mkdir_for(target_path)
    tmp_path = f"{target_path}.tmp.{uuid.uuid4().hex}"
    try:
        yield tmp_path
    except Exception:
        safe_delete(tmp_path)
        raise
    else:
        if os.path.exists(tmp_path):
            try:
                shutil.move(tmp_path, target_path)
            except OSError as e:
                if e.errno != errno.EEXIST:
                    raise
