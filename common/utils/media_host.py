from dataclasses import dataclass
from typing import Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from flask import current_app

from common.utils.logging_utils import get_logger
from common.utils.upload_utils import remove_temp_file

logger = get_logger('media_host')


@dataclass
class MediaUploadResult:
    url: str
    public_id: str
    resource_type: str
    duration: float = 0.0


def _options(**extra):
    cloud_name = current_app.config.get('CLOUDINARY_CLOUD_NAME')
    api_key = current_app.config.get('CLOUDINARY_API_KEY')
    api_secret = current_app.config.get('CLOUDINARY_API_SECRET')

    if not (cloud_name and api_key and api_secret):
        return None

    options = {
        'cloud_name': cloud_name,
        'api_key': api_key,
        'api_secret': api_secret,
        'secure': True,
        'timeout': current_app.config.get('MEDIA_HOST_TIMEOUT', 120),
    }
    options.update(extra)
    return options


def upload_on_media_host(local_path, resource_type='auto') -> Optional[MediaUploadResult]:
    if not local_path:
        return None

    try:
        options = _options(resource_type=resource_type)
        if options is None:
            logger.error("Media host credentials are not configured")
            return None

        folder = current_app.config.get('CLOUDINARY_FOLDER')
        if folder:
            options['folder'] = folder

        body = cloudinary.uploader.upload(local_path, **options)

        result = MediaUploadResult(
            url=body.get('secure_url') or body.get('url'),
            public_id=body.get('public_id'),
            resource_type=body.get('resource_type', resource_type),
            duration=float(body.get('duration') or 0)
        )
        logger.info(f"Uploaded {result.resource_type} asset {result.public_id}")
        return result

    except (CloudinaryError, OSError, ValueError) as e:
        logger.error(f"Media host upload failed for {local_path}: {e}")
        return None

    finally:
        remove_temp_file(local_path)


def delete_from_media_host(public_id, resource_type='image') -> bool:
    if not public_id:
        return False

    options = _options(resource_type=resource_type)
    if options is None:
        return False

    try:
        body = cloudinary.uploader.destroy(public_id, **options)
        return body.get('result') == 'ok'

    except (CloudinaryError, OSError) as e:
        logger.warning(f"Media host delete failed for {public_id}: {e}")
        return False
