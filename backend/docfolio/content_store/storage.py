import os
import uuid
from flask import current_app
from werkzeug.utils import secure_filename
from .errors import StorageError

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'svg'}

def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS

def upload_folder():
    folder = current_app.config.get('UPLOAD_FOLDER', 'uploads')
    if not os.path.isabs(folder):
        folder = os.path.join(current_app.instance_path, folder)
    return folder

def upload(file):
    """
    Store an uploaded image under a random name and return its storage path.

    The path is a random hex segment plus the original file extension.
    """
    if not file or not file.filename:
        raise StorageError("No file provided")

    if not allowed_file(file.filename):
        raise StorageError("File type not allowed")

    filename = secure_filename(file.filename)
    ext = filename.rsplit('.', 1)[1].lower()
    path = f"{uuid.uuid4().hex}.{ext}"

    folder = upload_folder()
    os.makedirs(folder, exist_ok=True)
    file.save(os.path.join(folder, path))

    current_app.logger.info(f"Stored upload {filename} as {path}")
    return path

def public_url(path):
    prefix = current_app.config.get('MEDIA_URL_PREFIX', '/media').rstrip('/')
    return f"{prefix}/{path}"

def path_from_url(url):
    """Inverse of public_url; None when the URL is not one of ours."""
    if not url:
        return None
    prefix = current_app.config.get('MEDIA_URL_PREFIX', '/media').rstrip('/') + '/'
    if not url.startswith(prefix):
        return None
    return url[len(prefix):]

def remove(path):
    """
    Deletes a stored blob given its storage path.
    """
    if not path:
        return False

    file_path = os.path.join(upload_folder(), secure_filename(path))

    if os.path.exists(file_path):
        try:
            os.remove(file_path)
            return True
        except OSError as e:
            current_app.logger.error(f"Failed to delete file {file_path}: {e}")
            return False
    return False
