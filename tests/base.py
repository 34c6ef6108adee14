"""Shared test case: in-memory SQLite, mongomock and a patched media host."""

import io
import os
import shutil
import tempfile
import unittest
from datetime import datetime, timedelta
from unittest.mock import patch

import mongomock

import common.extensions as extensions
from app import create_app
from common.extensions import db
from common.utils.media_host import MediaUploadResult

_app = None


def get_app():
    # one app per test run, the blueprints hang off a module level Api
    global _app
    if _app is None:
        _app = create_app('testing', mongo_client=mongomock.MongoClient())
    return _app


def bearer(token):
    return {'Authorization': f'Bearer {token}'}


class ApiTestCase(unittest.TestCase):

    VIDEO_DURATION = 120.0

    def setUp(self):
        self.app = get_app()

        self.upload_dir = tempfile.mkdtemp(prefix='yourtube-test-')
        self.addCleanup(shutil.rmtree, self.upload_dir, True)
        self.app.config['UPLOAD_FOLDER'] = self.upload_dir

        with self.app.app_context():
            db.session.remove()
            db.drop_all()
            db.create_all()

        extensions.mongo_client.drop_database(self.app.config['MONGO_DB_NAME'])
        extensions.redis_client = None

        self.uploads = []
        self.deleted_assets = []

        upload_patcher = patch('common.utils.media_host.upload_on_media_host', side_effect=self._fake_upload)
        delete_patcher = patch('common.utils.media_host.delete_from_media_host', side_effect=self._fake_delete)
        self.upload_mock = upload_patcher.start()
        self.delete_mock = delete_patcher.start()
        self.addCleanup(upload_patcher.stop)
        self.addCleanup(delete_patcher.stop)

        self.client = self.app.test_client(use_cookies=False)

    # ==================== Media host doubles ====================

    def _fake_upload(self, local_path, resource_type='auto'):
        if not local_path:
            return None

        name = os.path.basename(local_path)
        os.remove(local_path)
        self.uploads.append((resource_type, name))

        return MediaUploadResult(
            url=f'https://media.test/{resource_type}/{name}',
            public_id=f'{resource_type}/{name}',
            resource_type=resource_type,
            duration=self.VIDEO_DURATION if resource_type == 'video' else 0.0
        )

    def _fake_delete(self, public_id, resource_type='image'):
        self.deleted_assets.append((resource_type, public_id))
        return True

    # ==================== Users ====================

    def register(self, username='alice', password='secret123', email=None, fullname=None,
                 avatar=True, cover_image=False):
        data = {
            'fullname': fullname or username.title(),
            'email': email or f'{username}@example.com',
            'username': username,
            'password': password,
        }
        if avatar:
            data['avatar'] = (io.BytesIO(b'avatar-bytes'), 'avatar.png')
        if cover_image:
            data['cover_image'] = (io.BytesIO(b'cover-bytes'), 'cover.png')

        return self.client.post('/api/v1/users/register', data=data, content_type='multipart/form-data')

    def login(self, username='alice', password='secret123'):
        return self.client.post('/api/v1/users/login', json={'username': username, 'password': password})

    def create_user(self, username='alice', password='secret123'):
        response = self.register(username, password=password)
        self.assertEqual(response.status_code, 201, response.get_json())

        body = self.login(username, password).get_json()
        return body['data']['user']['user_id'], bearer(body['data']['accessToken'])

    # ==================== Videos ====================

    def publish_video(self, headers, title='Video', description='A video', tags=None):
        data = {
            'title': title,
            'description': description,
            'video_file': (io.BytesIO(b'video-bytes'), 'clip.mp4'),
            'thumbnail': (io.BytesIO(b'thumb-bytes'), 'thumb.png'),
        }
        if tags is not None:
            data['tags'] = tags

        response = self.client.post('/api/v1/videos', data=data, headers=headers, content_type='multipart/form-data')
        self.assertEqual(response.status_code, 201, response.get_json())
        return response.get_json()['data']

    def set_video_fields(self, video_id, **fields):
        from app.models.video import Video

        with self.app.app_context():
            video = db.session.get(Video, video_id)
            for key, value in fields.items():
                setattr(video, key, value)
            db.session.commit()

    def age_video(self, video_id, hours):
        self.set_video_fields(video_id, created_at=datetime.utcnow() - timedelta(hours=hours))

    def watch(self, headers, video_id, seconds, is_completed=False):
        response = self.client.patch('/api/v1/videos/watch-update', json={
            'video_id': video_id,
            'watch_duration_seconds': seconds,
            'is_completed': is_completed
        }, headers=headers)
        self.assertEqual(response.status_code, 200, response.get_json())
        return response.get_json()['data']

    def history_collection(self):
        return extensions.mongo_db['watch_history']

    def set_last_watched(self, user_id, video_id, hours_ago):
        self.history_collection().update_one(
            {'user_id': user_id, 'video_id': video_id},
            {'$set': {'last_watched_at': datetime.utcnow() - timedelta(hours=hours_ago)}}
        )

    # ==================== Assertions ====================

    def assertError(self, response, status, code=None):
        body = response.get_json()
        self.assertEqual(response.status_code, status, body)
        self.assertEqual(body['statusCode'], status)
        self.assertFalse(body['success'])
        if code is not None:
            self.assertEqual(body['code'], code)
        return body
