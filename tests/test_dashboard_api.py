import unittest
from datetime import datetime, timedelta

from tests.base import ApiTestCase


class DashboardTests(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.owner_id, self.owner = self.create_user('owner')
        _, self.fan = self.create_user('fan')
        _, self.critic = self.create_user('critic')

        self.hit = self.publish_video(self.owner, title='Hit')
        self.flop = self.publish_video(self.owner, title='Flop')
        self.old = self.publish_video(self.owner, title='Old')
        self.set_video_fields(self.hit['video_id'], view_count=90)
        self.set_video_fields(self.flop['video_id'], view_count=6)
        self.set_video_fields(
            self.old['video_id'], view_count=24, created_at=datetime.utcnow() - timedelta(days=45)
        )

        self.client.post(f"/api/v1/likes/toggle/v/{self.hit['video_id']}", headers=self.fan)
        self.client.post(f"/api/v1/likes/toggle/v/{self.hit['video_id']}", headers=self.critic)
        self.client.post(f"/api/v1/likes/toggle/v/{self.old['video_id']}", headers=self.fan)
        self.client.post(f"/api/v1/comments/{self.hit['video_id']}", json={'content': 'wow'}, headers=self.fan)
        self.client.post(f'/api/v1/subscriptions/c/{self.owner_id}', headers=self.fan)

    def test_channel_stats(self):
        response = self.client.get('/api/v1/dashboard/stats', headers=self.owner)

        self.assertEqual(response.status_code, 200)
        stats = response.get_json()['data']
        self.assertEqual(stats['total_videos'], 3)
        self.assertEqual(stats['total_views'], 120)
        self.assertEqual(stats['total_likes'], 3)
        self.assertEqual(stats['average_views'], 40.0)
        self.assertEqual(stats['total_subscribers'], 1)
        self.assertEqual(stats['total_subscribed_to'], 0)
        self.assertEqual(stats['last_30_days'], {'videos': 2, 'views': 96, 'likes': 2})
        self.assertEqual(stats['top_video']['title'], 'Hit')

    def test_recent_likes_only_count_recent_videos(self):
        _, owner = self.create_user('veteran')
        archived = self.publish_video(owner, title='Archived')
        self.age_video(archived['video_id'], hours=45 * 24)
        self.client.post(f"/api/v1/likes/toggle/v/{archived['video_id']}", headers=self.fan)

        stats = self.client.get('/api/v1/dashboard/stats', headers=owner).get_json()['data']

        self.assertEqual(stats['total_likes'], 1)
        self.assertEqual(stats['last_30_days'], {'videos': 0, 'views': 0, 'likes': 0})

    def test_empty_channel(self):
        stats = self.client.get('/api/v1/dashboard/stats', headers=self.critic).get_json()['data']

        self.assertEqual(stats['total_videos'], 0)
        self.assertEqual(stats['average_views'], 0.0)
        self.assertIsNone(stats['top_video'])

    def test_channel_videos_include_unpublished_with_counts(self):
        self.client.patch(f"/api/v1/videos/toggle/publish/{self.flop['video_id']}", headers=self.owner)

        response = self.client.get('/api/v1/dashboard/videos?sort_by=view_count', headers=self.owner)

        data = response.get_json()['data']
        self.assertEqual(data['total_docs'], 3)
        self.assertEqual([v['title'] for v in data['docs']], ['Hit', 'Old', 'Flop'])
        hit = data['docs'][0]
        self.assertEqual(hit['likes_count'], 2)
        self.assertEqual(hit['comments_count'], 1)
        self.assertFalse(data['docs'][2]['is_published'])

    def test_requires_login(self):
        self.assertError(self.client.get('/api/v1/dashboard/stats'), 401)


if __name__ == '__main__':
    unittest.main()
