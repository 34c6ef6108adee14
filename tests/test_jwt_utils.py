import unittest
from datetime import timedelta
from types import SimpleNamespace

import jwt

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils.jwt_utils import create_access_token, create_refresh_token, decode_token, encode_token
from tests.base import get_app


class JwtUtilsTests(unittest.TestCase):

    def setUp(self):
        self.app = get_app()
        self.ctx = self.app.app_context()
        self.ctx.push()
        self.addCleanup(self.ctx.pop)
        self.user = SimpleNamespace(user_id='user-1', email='a@example.com', username='alice', fullname='Alice')

    def test_access_token_carries_profile_claims(self):
        payload = decode_token(create_access_token(self.user))

        self.assertEqual(payload['sub'], 'user-1')
        self.assertEqual(payload['type'], 'access')
        self.assertEqual(payload['username'], 'alice')
        self.assertEqual(payload['email'], 'a@example.com')

    def test_refresh_token_has_no_profile_claims(self):
        payload = decode_token(create_refresh_token(self.user))

        self.assertEqual(payload['type'], 'refresh')
        self.assertNotIn('email', payload)

    def test_tokens_issued_together_differ(self):
        self.assertNotEqual(create_refresh_token(self.user), create_refresh_token(self.user))

    def test_expired_token(self):
        token = encode_token('user-1', timedelta(seconds=-5), 'access')

        with self.assertRaises(BusinessError) as ctx:
            decode_token(token)
        self.assertIs(ctx.exception.error_enum, APIError.AUTH_TOKEN_EXPIRED)

    def test_foreign_signature(self):
        token = jwt.encode({'sub': 'user-1', 'type': 'access'}, 'another-secret', algorithm='HS256')

        with self.assertRaises(BusinessError) as ctx:
            decode_token(token)
        self.assertIs(ctx.exception.error_enum, APIError.AUTH_INVALID_TOKEN)


if __name__ == '__main__':
    unittest.main()
