import os
import uuid
from datetime import datetime, timezone
from werkzeug.utils import secure_filename
from flask import current_app

MEDIA_URL_PREFIX = "/uploads"


def upload_folder():
    folder = current_app.config.get("UPLOAD_FOLDER", "uploads")
    if not os.path.isabs(folder):
        folder = os.path.join(current_app.instance_path, folder)
    return folder


def allowed_file(filename):
    allowed = current_app.config["ALLOWED_IMAGE_EXTENSIONS"]
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed


def save_file(file):
    """
    Store an uploaded image and return its durable path.
    """
    if not file.filename or not allowed_file(file.filename):
        raise ValueError("Invalid file type. Only JPG, PNG, GIF, and WebP files are allowed.")

    filename = secure_filename(file.filename)
    name, ext = filename.rsplit('.', 1)
    unique_filename = f"{name}-{uuid.uuid4().hex[:12]}.{ext.lower()}"

    folder = upload_folder()
    os.makedirs(folder, exist_ok=True)
    file.save(os.path.join(folder, unique_filename))

    return f"{MEDIA_URL_PREFIX}/{unique_filename}"


def list_files():
    """
    Stored images, newest first.
    """
    folder = upload_folder()
    if not os.path.isdir(folder):
        return []

    images = []
    for entry in os.scandir(folder):
        if not entry.is_file() or not allowed_file(entry.name):
            continue
        stats = entry.stat()
        images.append({
            "filename": entry.name,
            "path": f"{MEDIA_URL_PREFIX}/{entry.name}",
            "size": stats.st_size,
            "uploaded_at": datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc).isoformat(),
        })

    images.sort(key=lambda image: image["uploaded_at"], reverse=True)
    return images


def delete_file(filename):
    """
    Deletes a stored image by filename or media path.
    Returns False when nothing was there to delete.
    """
    if not filename:
        return False

    # Path components are never honoured
    file_path = os.path.join(upload_folder(), os.path.basename(filename))

    if not os.path.exists(file_path):
        return False

    try:
        os.remove(file_path)
    except OSError as e:
        current_app.logger.error(f"Failed to delete file {file_path}: {e}")
        raise
    return True
