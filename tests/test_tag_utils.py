import unittest

from common.enum.content_tag import ContentTagEnum
from common.utils.tag_utils import normalize_tags, extract_hashtags, filter_catalog_tags


class NormalizeTagsTests(unittest.TestCase):

    def test_csv_string_is_split_and_lowercased(self):
        self.assertEqual(normalize_tags(' Music, #Rock ,music,, '), ['music', 'rock'])

    def test_list_input_keeps_first_seen_order(self):
        self.assertEqual(normalize_tags(['Gaming', 'esports', 'GAMING']), ['gaming', 'esports'])

    def test_none_and_overlong_tags_are_dropped(self):
        self.assertEqual(normalize_tags(None), [])
        self.assertEqual(normalize_tags(['x' * 51, 'ok', 3]), ['ok'])


class HashtagTests(unittest.TestCase):

    def test_hashtags_are_extracted_from_text(self):
        self.assertEqual(extract_hashtags('Best #Python tips #webdev and #python again'), ['python', 'webdev'])

    def test_text_without_hashtags(self):
        self.assertEqual(extract_hashtags('plain description'), [])
        self.assertEqual(extract_hashtags(None), [])


class CatalogTagTests(unittest.TestCase):

    def test_only_catalog_tags_survive(self):
        self.assertEqual(filter_catalog_tags(['Gaming', 'not-a-tag', 'MUSIC']), ['gaming', 'music'])

    def test_catalog_has_forty_two_tags(self):
        self.assertEqual(len(ContentTagEnum.values()), 42)
        self.assertTrue(ContentTagEnum.is_valid('anime'))
        self.assertFalse(ContentTagEnum.is_valid('Anime'))


if __name__ == '__main__':
    unittest.main()
