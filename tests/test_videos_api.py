import io
import unittest
import uuid

from tests.base import ApiTestCase


class PublishVideoTests(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.user_id, self.headers = self.create_user('alice')
        self.upload_mock.reset_mock()

    def test_publish_uploads_both_files(self):
        video = self.publish_video(self.headers, title=' Intro ', description='Hello', tags='Python, #WebDev,python')

        self.assertEqual(video['title'], 'Intro')
        self.assertEqual(video['duration'], self.VIDEO_DURATION)
        self.assertEqual(video['view_count'], 0)
        self.assertTrue(video['is_published'])
        self.assertEqual(video['tags'], ['python', 'webdev'])
        self.assertEqual(video['owner']['user_id'], self.user_id)
        self.assertTrue(video['video_file'].startswith('https://media.test/video/'))
        self.assertTrue(video['thumbnail'].startswith('https://media.test/image/'))

    def test_tags_default_to_description_hashtags(self):
        video = self.publish_video(self.headers, description='Speedrun #Minecraft with #gaming friends')

        self.assertEqual(video['tags'], ['minecraft', 'gaming'])

    def test_thumbnail_is_required(self):
        response = self.client.post('/api/v1/videos', data={
            'title': 'No thumb',
            'description': 'desc',
            'video_file': (io.BytesIO(b'video'), 'clip.mp4'),
        }, headers=self.headers, content_type='multipart/form-data')

        self.assertError(response, 400, 'V004')
        self.upload_mock.assert_not_called()

    def test_video_file_is_required(self):
        response = self.client.post('/api/v1/videos', data={
            'title': 'No video',
            'description': 'desc',
            'thumbnail': (io.BytesIO(b'thumb'), 'thumb.png'),
        }, headers=self.headers, content_type='multipart/form-data')

        self.assertError(response, 400, 'V003')

    def test_failed_thumbnail_upload_removes_hosted_video(self):
        def upload(local_path, resource_type='auto'):
            if resource_type == 'image':
                return None
            return self._fake_upload(local_path, resource_type)

        self.upload_mock.side_effect = upload

        response = self.client.post('/api/v1/videos', data={
            'title': 'Broken',
            'description': 'desc',
            'video_file': (io.BytesIO(b'video'), 'clip.mp4'),
            'thumbnail': (io.BytesIO(b'thumb'), 'thumb.png'),
        }, headers=self.headers, content_type='multipart/form-data')

        self.assertError(response, 500, 'F001')
        self.assertEqual([asset[0] for asset in self.deleted_assets], ['video'])
        self.assertEqual(self.client.get('/api/v1/videos').get_json()['data']['total_docs'], 0)

    def test_publish_requires_login(self):
        response = self.client.post('/api/v1/videos', data={'title': 't', 'description': 'd'},
                                    content_type='multipart/form-data')
        self.assertError(response, 401, 'A003')


class ListVideosTests(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.alice_id, self.alice = self.create_user('alice')
        self.bob_id, self.bob = self.create_user('bob')

        self.cats = self.publish_video(self.alice, title='Funny cats', description='cats')
        self.dogs = self.publish_video(self.alice, title='Dogs', description='all about dogs')
        self.cooking = self.publish_video(self.bob, title='Cooking pasta', description='with cats watching')
        self.set_video_fields(self.cats['video_id'], view_count=5)
        self.set_video_fields(self.dogs['video_id'], view_count=50)
        self.set_video_fields(self.cooking['video_id'], view_count=1)

    def titles(self, response):
        self.assertEqual(response.status_code, 200, response.get_json())
        return [v['title'] for v in response.get_json()['data']['docs']]

    def test_sort_by_views(self):
        response = self.client.get('/api/v1/videos?sort_by=view_count&sort_type=desc')
        self.assertEqual(self.titles(response), ['Dogs', 'Funny cats', 'Cooking pasta'])

        response = self.client.get('/api/v1/videos?sort_by=view_count&sort_type=asc')
        self.assertEqual(self.titles(response), ['Cooking pasta', 'Funny cats', 'Dogs'])

    def test_search_matches_title_and_description(self):
        response = self.client.get('/api/v1/videos?query=CATS&sort_by=title&sort_type=asc')
        self.assertEqual(self.titles(response), ['Cooking pasta', 'Funny cats'])

    def test_filter_by_owner(self):
        response = self.client.get(f'/api/v1/videos?user_id={self.bob_id}')
        self.assertEqual(self.titles(response), ['Cooking pasta'])

    def test_pagination_metadata(self):
        response = self.client.get('/api/v1/videos?page=2&limit=2&sort_by=view_count')

        data = response.get_json()['data']
        self.assertEqual(data['total_docs'], 3)
        self.assertEqual(data['total_pages'], 2)
        self.assertEqual(data['page'], 2)
        self.assertFalse(data['has_next_page'])
        self.assertEqual([v['title'] for v in data['docs']], ['Cooking pasta'])

    def test_unpublished_videos_are_hidden(self):
        self.client.patch(f"/api/v1/videos/toggle/publish/{self.dogs['video_id']}", headers=self.alice)

        response = self.client.get('/api/v1/videos?sort_by=view_count')
        self.assertEqual(self.titles(response), ['Funny cats', 'Cooking pasta'])

    def test_invalid_sort_field(self):
        self.assertError(self.client.get('/api/v1/videos?sort_by=password'), 400, 'C002')


class VideoDetailTests(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.owner_id, self.owner = self.create_user('owner')
        self.viewer_id, self.viewer = self.create_user('viewer')
        self.video = self.publish_video(self.owner, tags='music')

    def test_each_fetch_counts_a_view(self):
        self.client.get(f"/api/v1/videos/{self.video['video_id']}")
        response = self.client.get(f"/api/v1/videos/{self.video['video_id']}", headers=self.viewer)

        data = response.get_json()['data']
        self.assertEqual(data['view_count'], 2)
        self.assertEqual(data['likes_count'], 0)
        self.assertFalse(data['is_liked'])

    def test_signed_in_fetch_records_history(self):
        self.client.get(f"/api/v1/videos/{self.video['video_id']}", headers=self.viewer)

        record = self.history_collection().find_one({'user_id': self.viewer_id})
        self.assertEqual(record['video_id'], self.video['video_id'])
        self.assertEqual(record['watch_duration_seconds'], 0.0)

    def test_unknown_and_malformed_ids(self):
        self.assertError(self.client.get(f'/api/v1/videos/{uuid.uuid4()}'), 404, 'V001')
        self.assertError(self.client.get('/api/v1/videos/not-a-uuid'), 400, 'C004')

    def test_unpublished_video_is_visible_to_owner_only(self):
        self.client.patch(f"/api/v1/videos/toggle/publish/{self.video['video_id']}", headers=self.owner)

        self.assertError(self.client.get(f"/api/v1/videos/{self.video['video_id']}", headers=self.viewer), 404)
        self.assertEqual(
            self.client.get(f"/api/v1/videos/{self.video['video_id']}", headers=self.owner).status_code, 200
        )


class ModifyVideoTests(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.owner_id, self.owner = self.create_user('owner')
        _, self.other = self.create_user('other')
        self.video = self.publish_video(self.owner, tags='music,rock')
        self.url = f"/api/v1/videos/{self.video['video_id']}"

    def test_update_fields_and_tags(self):
        response = self.client.patch(self.url, data={'title': 'New title', 'tags': 'jazz, Music'},
                                     headers=self.owner, content_type='multipart/form-data')

        self.assertEqual(response.status_code, 200)
        data = response.get_json()['data']
        self.assertEqual(data['title'], 'New title')
        self.assertEqual(data['description'], 'A video')
        self.assertEqual(data['tags'], ['jazz', 'music'])

    def test_update_thumbnail_deletes_old_one(self):
        response = self.client.patch(self.url, data={'thumbnail': (io.BytesIO(b'new'), 'new.png')},
                                     headers=self.owner, content_type='multipart/form-data')

        self.assertEqual(response.status_code, 200)
        self.assertNotEqual(response.get_json()['data']['thumbnail'], self.video['thumbnail'])
        self.assertEqual(len(self.deleted_assets), 1)

    def test_blank_title_is_rejected(self):
        response = self.client.patch(self.url, data={'title': '  '}, headers=self.owner,
                                     content_type='multipart/form-data')
        self.assertError(response, 400, 'C002')

    def test_non_owner_is_forbidden(self):
        response = self.client.patch(self.url, data={'title': 'Hijack'}, headers=self.other,
                                     content_type='multipart/form-data')
        self.assertError(response, 403, 'V002')
        self.assertError(self.client.delete(self.url, headers=self.other), 403, 'V002')
        self.assertError(
            self.client.patch(f"/api/v1/videos/toggle/publish/{self.video['video_id']}", headers=self.other), 403
        )

    def test_toggle_publish(self):
        url = f"/api/v1/videos/toggle/publish/{self.video['video_id']}"

        self.assertFalse(self.client.patch(url, headers=self.owner).get_json()['data']['is_published'])
        self.assertTrue(self.client.patch(url, headers=self.owner).get_json()['data']['is_published'])

    def test_delete_removes_dependents(self):
        self.client.post(f"/api/v1/comments/{self.video['video_id']}", json={'content': 'nice'}, headers=self.other)
        self.client.post(f"/api/v1/likes/toggle/v/{self.video['video_id']}", headers=self.other)
        self.watch(self.other, self.video['video_id'], 10)

        response = self.client.delete(self.url, headers=self.owner)

        self.assertEqual(response.status_code, 200)
        self.assertError(self.client.get(self.url), 404)
        self.assertEqual(self.client.get('/api/v1/likes/videos', headers=self.other).get_json()['data']['total'], 0)
        self.assertIsNone(self.history_collection().find_one({'video_id': self.video['video_id']}))
        self.assertEqual(sorted(asset[0] for asset in self.deleted_assets), ['image', 'video'])


class WatchProgressTests(ApiTestCase):

    def setUp(self):
        super().setUp()
        _, self.owner = self.create_user('owner')
        self.viewer_id, self.viewer = self.create_user('viewer')
        self.video = self.publish_video(self.owner)

    def test_progress_is_upserted(self):
        self.watch(self.viewer, self.video['video_id'], 30)
        progress = self.watch(self.viewer, self.video['video_id'], 45)

        self.assertEqual(progress['watch_duration_seconds'], 45)
        self.assertFalse(progress['is_completed'])
        self.assertEqual(self.history_collection().count_documents({'user_id': self.viewer_id}), 1)

    def test_completion_is_sticky(self):
        self.watch(self.viewer, self.video['video_id'], 120, is_completed=True)
        progress = self.watch(self.viewer, self.video['video_id'], 10, is_completed=False)

        self.assertTrue(progress['is_completed'])
        self.assertEqual(progress['watch_duration_seconds'], 10)

    def test_unknown_video_and_negative_seconds(self):
        response = self.client.patch('/api/v1/videos/watch-update', json={
            'video_id': str(uuid.uuid4()), 'watch_duration_seconds': 5
        }, headers=self.viewer)
        self.assertError(response, 404, 'V001')

        response = self.client.patch('/api/v1/videos/watch-update', json={
            'video_id': self.video['video_id'], 'watch_duration_seconds': -1
        }, headers=self.viewer)
        self.assertError(response, 400, 'C002')

    def test_requires_login(self):
        response = self.client.patch('/api/v1/videos/watch-update', json={
            'video_id': self.video['video_id'], 'watch_duration_seconds': 5
        })
        self.assertError(response, 401)


if __name__ == '__main__':
    unittest.main()
