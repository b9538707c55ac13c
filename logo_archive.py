"""Zip up the logos a batch found."""

import io
import re
import time
import zipfile

from logo_batch import SUCCESS

MIME_TO_EXT = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/gif": "gif",
    "image/svg+xml": "svg",
    "image/webp": "webp",
    "image/x-icon": "ico",
    "image/vnd.microsoft.icon": "ico",
}


def extension_for(content_type):
    mime = (content_type or "").split(";")[0].strip().lower()
    return MIME_TO_EXT.get(mime, "png")


def sanitize_filename(name):
    text = re.sub(r"[^a-z0-9]", "-", name.lower())
    text = re.sub(r"-+", "-", text)
    return text.strip("-") or "logo"


def logo_filename(company, content_type):
    return f"{sanitize_filename(company)}.{extension_for(content_type)}"


def named_logos(records):
    """(position, filename, record) for every successful record; clashing names get -2, -3, ..."""
    used = set()
    for position, record in enumerate(records):
        if record.status != SUCCESS or not record.content:
            continue
        stem = sanitize_filename(record.company)
        ext = extension_for(record.content_type)
        filename, n = logo_filename(record.company, record.content_type), 1
        while filename in used:
            n += 1
            filename = f"{stem}-{n}.{ext}"
        used.add(filename)
        yield position, filename, record


def build_zip(records):
    """Zip every successful record; returns the archive bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for _, filename, record in named_logos(records):
            zf.writestr(filename, record.content)

    return buffer.getvalue()


def archive_name():
    return f"logos-{int(time.time() * 1000)}.zip"
