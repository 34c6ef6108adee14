import io
import unittest
import uuid
from datetime import datetime
from unittest.mock import MagicMock

import common.extensions as extensions
from tests.base import ApiTestCase, bearer


class RegisterTests(ApiTestCase):

    def test_register_returns_user_without_secrets(self):
        response = self.register('Alice', email='Alice@Example.com', cover_image=True)

        body = response.get_json()
        self.assertEqual(response.status_code, 201)
        self.assertTrue(body['success'])
        user = body['data']
        self.assertEqual(user['username'], 'alice')
        self.assertEqual(user['email'], 'alice@example.com')
        self.assertTrue(user['avatar'].startswith('https://media.test/image/'))
        self.assertIsNotNone(user['cover_image'])
        self.assertFalse(user['has_completed_onboarding'])
        self.assertNotIn('password', user)
        self.assertNotIn('refresh_token', user)

    def test_duplicate_username_or_email_conflicts(self):
        self.register('alice')

        self.assertError(self.register('alice', email='other@example.com'), 409, 'A005')
        self.assertError(self.register('bob', email='alice@example.com'), 409, 'A005')

    def test_avatar_is_required(self):
        self.assertError(self.register('alice', avatar=False), 400, 'U003')

    def test_blank_field_is_rejected(self):
        self.assertError(self.register('alice', fullname='   '), 400, 'C002')

    def test_invalid_email_is_a_validation_error(self):
        body = self.assertError(self.register('alice', email='not-an-email'), 400, 'C002')
        self.assertTrue(any(e['field'] == 'email' for e in body['errors']))


class LoginTests(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.register('alice')

    def test_login_sets_http_only_cookies(self):
        response = self.login('alice')

        self.assertEqual(response.status_code, 200)
        data = response.get_json()['data']
        self.assertEqual(data['user']['username'], 'alice')
        self.assertTrue(data['accessToken'])
        self.assertTrue(data['refreshToken'])

        cookies = response.headers.getlist('Set-Cookie')
        self.assertTrue(any(c.startswith('accessToken=') and 'HttpOnly' in c for c in cookies))
        self.assertTrue(any(c.startswith('refreshToken=') and 'HttpOnly' in c for c in cookies))

    def test_login_by_email(self):
        response = self.client.post('/api/v1/users/login', json={'email': 'ALICE@example.com', 'password': 'secret123'})
        self.assertEqual(response.status_code, 200)

    def test_unknown_user_and_wrong_password(self):
        self.assertError(self.login('nobody'), 404, 'U001')
        self.assertError(self.login('alice', 'wrong-password'), 401, 'A004')

    def test_username_or_email_is_required(self):
        response = self.client.post('/api/v1/users/login', json={'password': 'secret123'})
        self.assertError(response, 400, 'C002')

    def test_cookie_authenticates_requests(self):
        client = self.app.test_client()
        client.post('/api/v1/users/login', json={'username': 'alice', 'password': 'secret123'})

        response = client.get('/api/v1/users/current-user')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['data']['username'], 'alice')


class TokenTests(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.register('alice')
        data = self.login('alice').get_json()['data']
        self.access_token = data['accessToken']
        self.refresh_token = data['refreshToken']

    def test_protected_route_requires_token(self):
        self.assertError(self.client.get('/api/v1/users/current-user'), 401, 'A003')
        self.assertError(self.client.get('/api/v1/users/current-user', headers=bearer('garbage')), 401, 'A002')

    def test_refresh_token_is_not_an_access_token(self):
        response = self.client.get('/api/v1/users/current-user', headers=bearer(self.refresh_token))
        self.assertError(response, 401, 'A002')

    def test_refresh_rotates_both_tokens(self):
        response = self.client.post('/api/v1/users/refresh-token', json={'refresh_token': self.refresh_token})

        self.assertEqual(response.status_code, 200)
        data = response.get_json()['data']
        self.assertNotEqual(data['refreshToken'], self.refresh_token)
        self.assertEqual(self.client.get('/api/v1/users/current-user', headers=bearer(data['accessToken'])).status_code, 200)

    def test_reused_refresh_token_is_rejected(self):
        self.client.post('/api/v1/users/refresh-token', json={'refresh_token': self.refresh_token})

        response = self.client.post('/api/v1/users/refresh-token', json={'refresh_token': self.refresh_token})

        self.assertError(response, 401, 'A006')

    def test_body_token_wins_over_stale_cookie(self):
        rotated = self.client.post('/api/v1/users/refresh-token', json={'refresh_token': self.refresh_token})
        fresh_token = rotated.get_json()['data']['refreshToken']

        client = self.app.test_client()
        client.set_cookie('refreshToken', self.refresh_token)
        response = client.post('/api/v1/users/refresh-token', json={'refresh_token': fresh_token})

        self.assertEqual(response.status_code, 200, response.get_json())

    def test_refresh_from_cookie(self):
        client = self.app.test_client()
        client.set_cookie('refreshToken', self.refresh_token)

        response = client.post('/api/v1/users/refresh-token')

        self.assertEqual(response.status_code, 200, response.get_json())
        self.assertNotEqual(response.get_json()['data']['refreshToken'], self.refresh_token)

    def test_refresh_without_token(self):
        self.assertError(self.client.post('/api/v1/users/refresh-token', json={}), 401, 'A003')

    def test_logout_invalidates_refresh_token(self):
        response = self.client.post('/api/v1/users/logout', headers=bearer(self.access_token))

        self.assertEqual(response.status_code, 200)
        self.assertTrue(any(c.startswith('accessToken=;') for c in response.headers.getlist('Set-Cookie')))
        response = self.client.post('/api/v1/users/refresh-token', json={'refresh_token': self.refresh_token})
        self.assertError(response, 401, 'A006')

    def test_logout_blacklists_access_token(self):
        redis_client = MagicMock()
        redis_client.exists.return_value = 0
        extensions.redis_client = redis_client

        self.client.post('/api/v1/users/logout', headers=bearer(self.access_token))

        key, ttl, _ = redis_client.setex.call_args.args
        self.assertEqual(key, f'yourtube:blacklist:{self.access_token}')
        self.assertGreater(ttl, 0)

        redis_client.exists.return_value = 1
        response = self.client.get('/api/v1/users/current-user', headers=bearer(self.access_token))
        self.assertError(response, 401, 'A002')


class AccountTests(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.user_id, self.headers = self.create_user('alice')

    def test_change_password(self):
        response = self.client.post('/api/v1/users/change-password', json={
            'old_password': 'wrong-password', 'new_password': 'another123'
        }, headers=self.headers)
        self.assertError(response, 400, 'A007')

        response = self.client.post('/api/v1/users/change-password', json={
            'old_password': 'secret123', 'new_password': 'another123'
        }, headers=self.headers)
        self.assertEqual(response.status_code, 200)

        self.assertEqual(self.login('alice', 'another123').status_code, 200)
        self.assertError(self.login('alice', 'secret123'), 401)

    def test_update_account(self):
        response = self.client.patch('/api/v1/users/update-account', json={
            'fullname': 'Alice Liddell', 'email': 'NEW@example.com'
        }, headers=self.headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['data']['email'], 'new@example.com')
        self.assertEqual(response.get_json()['data']['fullname'], 'Alice Liddell')

    def test_update_account_rejects_taken_email(self):
        self.register('bob')

        response = self.client.patch('/api/v1/users/update-account', json={
            'fullname': 'Alice', 'email': 'bob@example.com'
        }, headers=self.headers)

        self.assertError(response, 409, 'A008')

    def test_update_avatar_replaces_old_asset(self):
        old_avatar = self.client.get('/api/v1/users/current-user', headers=self.headers).get_json()['data']['avatar']

        response = self.client.patch('/api/v1/users/avatar', data={
            'avatar': (io.BytesIO(b'new-avatar'), 'new.png')
        }, headers=self.headers, content_type='multipart/form-data')

        self.assertEqual(response.status_code, 200)
        self.assertNotEqual(response.get_json()['data']['avatar'], old_avatar)
        self.assertEqual(len(self.deleted_assets), 1)

    def test_update_avatar_requires_file(self):
        response = self.client.patch('/api/v1/users/avatar', headers=self.headers)
        self.assertError(response, 400, 'U003')

    def test_update_cover_image(self):
        response = self.client.patch('/api/v1/users/cover-image', data={
            'cover_image': (io.BytesIO(b'cover'), 'cover.png')
        }, headers=self.headers, content_type='multipart/form-data')

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()['data']['cover_image'].startswith('https://media.test/image/'))


class ChannelProfileTests(ApiTestCase):

    def test_channel_profile_counts_subscriptions(self):
        alice_id, alice = self.create_user('alice')
        _, bob = self.create_user('bob')
        self.client.post(f'/api/v1/subscriptions/c/{alice_id}', headers=bob)

        response = self.client.get('/api/v1/users/c/Alice', headers=bob)

        self.assertEqual(response.status_code, 200)
        data = response.get_json()['data']
        self.assertEqual(data['subscribers_count'], 1)
        self.assertEqual(data['channels_subscribed_to_count'], 0)
        self.assertTrue(data['is_subscribed'])

        own = self.client.get('/api/v1/users/c/alice', headers=alice).get_json()['data']
        self.assertFalse(own['is_subscribed'])

    def test_unknown_channel(self):
        _, headers = self.create_user('alice')
        self.assertError(self.client.get('/api/v1/users/c/ghost', headers=headers), 404, 'U002')


class WatchHistoryTests(ApiTestCase):

    def test_history_lists_most_recent_first_and_skips_deleted_videos(self):
        _, owner = self.create_user('owner')
        viewer_id, viewer = self.create_user('viewer')
        first = self.publish_video(owner, title='First')
        second = self.publish_video(owner, title='Second')

        self.watch(viewer, first['video_id'], 60)
        self.watch(viewer, second['video_id'], 30, is_completed=True)
        self.set_last_watched(viewer_id, first['video_id'], hours_ago=2)
        self.set_last_watched(viewer_id, second['video_id'], hours_ago=1)
        self.history_collection().insert_one({
            'user_id': viewer_id,
            'video_id': str(uuid.uuid4()),
            'watch_duration_seconds': 10.0,
            'is_completed': False,
            'last_watched_at': datetime.utcnow()
        })

        response = self.client.get('/api/v1/users/history', headers=viewer)

        self.assertEqual(response.status_code, 200)
        data = response.get_json()['data']
        self.assertEqual(data['total'], 2)
        self.assertEqual([h['video']['title'] for h in data['history']], ['Second', 'First'])
        self.assertEqual(data['history'][0]['progress_percent'], 100.0)
        self.assertEqual(data['history'][1]['progress_percent'], 50.0)

    def test_clear_history(self):
        _, owner = self.create_user('owner')
        video = self.publish_video(owner)
        self.watch(owner, video['video_id'], 5)

        response = self.client.delete('/api/v1/users/history', headers=owner)

        self.assertEqual(response.get_json()['data'], {'deleted_count': 1})
        self.assertEqual(self.client.get('/api/v1/users/history', headers=owner).get_json()['data']['total'], 0)


if __name__ == '__main__':
    unittest.main()
