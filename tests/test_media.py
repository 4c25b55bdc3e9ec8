"""
tests/test_media.py
"""
from __future__ import annotations

import io
from pathlib import Path

from folio.models import AuditLog

IMAGES = "/api/v1/admin/images"
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _upload(client, headers, *files):
    return client.post(
        IMAGES,
        data={"images": [(io.BytesIO(data), name) for name, data in files]},
        headers=headers,
        content_type="multipart/form-data",
    )


def test_upload_returns_durable_paths(app, client, auth_headers):
    rv = _upload(client, auth_headers, ("Cover Photo.png", PNG))

    assert rv.status_code == 201
    (stored,) = rv.get_json()["files"]
    assert stored["original_name"] == "Cover Photo.png"
    assert stored["path"].startswith("/uploads/Cover_Photo-")
    assert stored["path"].endswith(".png")

    on_disk = Path(app.config["UPLOAD_FOLDER"]) / stored["path"].rsplit("/", 1)[1]
    assert on_disk.read_bytes() == PNG

    with app.app_context():
        assert AuditLog.query.filter_by(action="image.upload").count() == 1


def test_upload_rejects_other_file_types(client, auth_headers):
    rv = _upload(client, auth_headers, ("notes.txt", b"hello"))
    assert rv.status_code == 400


def test_upload_without_files(client, auth_headers):
    rv = client.post(IMAGES, data={}, headers=auth_headers, content_type="multipart/form-data")
    assert rv.status_code == 400


def test_upload_requires_admin(client):
    rv = _upload(client, {}, ("a.png", PNG))
    assert rv.status_code == 401


def test_list_and_delete(client, auth_headers):
    path = _upload(client, auth_headers, ("a.png", PNG)).get_json()["files"][0]["path"]
    filename = path.rsplit("/", 1)[1]

    listed = client.get(IMAGES, headers=auth_headers).get_json()["images"]
    assert [i["path"] for i in listed] == [path]

    assert client.delete(f"{IMAGES}/{filename}", headers=auth_headers).status_code == 200
    assert client.delete(f"{IMAGES}/{filename}", headers=auth_headers).status_code == 404
    assert client.get(IMAGES, headers=auth_headers).get_json()["images"] == []
