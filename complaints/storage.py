import os
import time
from werkzeug.utils import secure_filename


def attachment_key(user_id, filename, index=0, now=None):
    """Storage key for an uploaded file: ``<user_id>/<millis>_<index>.<ext>``."""
    millis = int((now if now is not None else time.time()) * 1000)
    ext = ""
    if filename and "." in filename:
        ext = secure_filename(filename.rsplit(".", 1)[1].lower())
    name = f"{millis}_{index}"
    return f"{user_id}/{name}.{ext}" if ext else f"{user_id}/{name}"


class AttachmentStorage:
    """Attachment files on local disk, served back under ``url_prefix``."""

    def __init__(self, root, url_prefix):
        self.root = root
        self.url_prefix = url_prefix.rstrip("/")

    def path_for(self, key):
        return os.path.join(self.root, *key.split("/"))

    def upload(self, key, file):
        path = self.path_for(key)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        file.stream.seek(0)
        file.save(path)
        return key

    def public_url(self, key):
        return f"{self.url_prefix}/{key}"


def storage_from_config(config):
    return AttachmentStorage(config["UPLOAD_FOLDER"], config["ATTACHMENT_URL_PREFIX"])
