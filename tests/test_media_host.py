import os
import tempfile
import unittest
from unittest.mock import patch

from cloudinary.exceptions import Error as CloudinaryError

from common.utils import media_host
from tests.base import get_app


class MediaHostTests(unittest.TestCase):

    def setUp(self):
        self.app = get_app()
        self.ctx = self.app.app_context()
        self.ctx.push()
        self.addCleanup(self.ctx.pop)

        fd, self.local_path = tempfile.mkstemp(suffix='.mp4')
        with os.fdopen(fd, 'wb') as fp:
            fp.write(b'video-bytes')
        self.addCleanup(lambda: os.path.exists(self.local_path) and os.remove(self.local_path))

    def test_upload_returns_hosted_url_and_duration(self):
        body = {
            'secure_url': 'https://res.test/video/upload/clip.mp4',
            'public_id': 'yourtube/clip',
            'resource_type': 'video',
            'duration': 12.5
        }
        with patch('common.utils.media_host.cloudinary.uploader.upload', return_value=body) as upload:
            result = media_host.upload_on_media_host(self.local_path, 'video')

        self.assertEqual(result.url, 'https://res.test/video/upload/clip.mp4')
        self.assertEqual(result.public_id, 'yourtube/clip')
        self.assertEqual(result.duration, 12.5)
        self.assertEqual(upload.call_args.args[0], self.local_path)
        options = upload.call_args.kwargs
        self.assertEqual(options['resource_type'], 'video')
        self.assertEqual(options['cloud_name'], 'test-cloud')
        self.assertEqual(options['api_key'], 'test-key')
        self.assertFalse(os.path.exists(self.local_path))

    def test_failed_upload_returns_none_and_removes_temp_file(self):
        with patch('common.utils.media_host.cloudinary.uploader.upload', side_effect=CloudinaryError('down')):
            result = media_host.upload_on_media_host(self.local_path, 'image')

        self.assertIsNone(result)
        self.assertFalse(os.path.exists(self.local_path))

    def test_missing_path_is_not_uploaded(self):
        with patch('common.utils.media_host.cloudinary.uploader.upload') as upload:
            self.assertIsNone(media_host.upload_on_media_host(None))
        upload.assert_not_called()

    def test_missing_credentials_skip_upload(self):
        with patch.dict(self.app.config, {'CLOUDINARY_API_SECRET': None}), \
                patch('common.utils.media_host.cloudinary.uploader.upload') as upload:
            self.assertIsNone(media_host.upload_on_media_host(self.local_path, 'image'))

        upload.assert_not_called()
        self.assertFalse(os.path.exists(self.local_path))

    def test_delete_reports_result(self):
        with patch('common.utils.media_host.cloudinary.uploader.destroy', return_value={'result': 'ok'}) as destroy:
            self.assertTrue(media_host.delete_from_media_host('yourtube/clip', 'video'))
        self.assertEqual(destroy.call_args.args[0], 'yourtube/clip')
        self.assertEqual(destroy.call_args.kwargs['resource_type'], 'video')

        with patch('common.utils.media_host.cloudinary.uploader.destroy', return_value={'result': 'not found'}):
            self.assertFalse(media_host.delete_from_media_host('yourtube/gone', 'image'))

        self.assertFalse(media_host.delete_from_media_host(None))


if __name__ == '__main__':
    unittest.main()
