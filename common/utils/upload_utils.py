import os
import uuid

from flask import current_app
from werkzeug.utils import secure_filename

from common.utils.logging_utils import get_logger

logger = get_logger('upload_utils')


def get_upload_folder():
    folder = current_app.config.get('UPLOAD_FOLDER')
    os.makedirs(folder, exist_ok=True)
    return folder


def save_temp_file(file_storage):
    if file_storage is None or not file_storage.filename:
        return None

    filename = secure_filename(file_storage.filename) or 'upload'
    local_path = os.path.join(get_upload_folder(), f"{uuid.uuid4().hex}_{filename}")

    file_storage.save(local_path)
    logger.debug(f"Saved upload to {local_path}")

    return local_path


def remove_temp_file(local_path):
    if not local_path:
        return

    try:
        os.remove(local_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Failed to remove temp file {local_path}: {e}")
