"""Helpers shared by the resource services."""
from __future__ import annotations

import logging
import os
import uuid

from django.core.files.storage import default_storage
from django.db import transaction

from ..exceptions import NotFoundError

logger = logging.getLogger(__name__)


def fetch(qs, pk, label: str):
    """Return the row ``pk`` of ``qs`` or raise a 404 naming ``label``."""
    obj = qs.filter(pk=pk).first()
    if obj is None:
        raise NotFoundError(f'{label} not found')
    return obj


def assign(obj, data: dict, fields) -> list[str]:
    """Copy the supplied ``fields`` of ``data`` onto ``obj``; absent keys are left alone."""
    changed = []
    for field in fields:
        if field in data:
            setattr(obj, field, data[field])
            changed.append(field)
    return changed


def decimal_str(value):
    return None if value is None else str(value)


def store_photos(files, folder: str) -> list[str]:
    """Save uploaded files under ``folder`` and return their storage paths."""
    paths = []
    for f in files or []:
        ext = os.path.splitext(f.name or '')[1].lower()
        paths.append(default_storage.save(f"{folder}/{uuid.uuid4().hex}{ext}", f))
    return paths


def discard_photos_on_commit(paths) -> None:
    """Delete stored files once the surrounding transaction commits."""
    paths = [p for p in (paths or []) if p]
    if not paths:
        return

    def _remove():
        for p in paths:
            try:
                default_storage.delete(p)
            except OSError:
                logger.warning('could not remove stored file %s', p)

    transaction.on_commit(_remove)
