from app.dto.common import PageDto
from app.dto.tweet import TweetDto
from app.models.tweet import Tweet
from app.services.like_service import LikeService, count_likes_bulk, liked_ids_bulk, count_likes, is_liked_by
from app.services.user_service import get_user_or_404
from common.decorator.db_decorators import transactional, transactional_readonly
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.extensions import db
from common.utils.logging_utils import get_logger
from common.utils.validators import ensure_valid_id

logger = get_logger('tweet_service')

TWEET_MAX_LENGTH = 280


def _clean_content(content) -> str:
    if content is None or not content.strip():
        raise BusinessError(APIError.INVALID_INPUT_VALUE, "Content is required")

    content = content.strip()
    if len(content) > TWEET_MAX_LENGTH:
        raise BusinessError(APIError.INVALID_INPUT_VALUE, f"Content must be at most {TWEET_MAX_LENGTH} characters")
    return content


def get_owned_tweet(tweet_id, user_id) -> Tweet:
    ensure_valid_id(tweet_id, 'tweet id')

    tweet = db.session.get(Tweet, tweet_id)
    if not tweet:
        raise BusinessError(APIError.TWEET_NOT_FOUND)
    if tweet.owner_id != user_id:
        raise BusinessError(APIError.TWEET_FORBIDDEN)
    return tweet


class TweetService:

    @staticmethod
    @transactional
    def create_tweet(user_id: str, content: str) -> TweetDto:
        tweet = Tweet(owner_id=user_id, content=_clean_content(content))
        db.session.add(tweet)
        db.session.flush()

        logger.info(f"User {user_id} posted tweet {tweet.tweet_id}")
        return TweetDto.from_model(tweet)

    @staticmethod
    @transactional_readonly
    def get_user_tweets(user_id: str, page: int, limit: int, viewer_id: str) -> PageDto:
        ensure_valid_id(user_id, 'user id')
        get_user_or_404(user_id)

        query = Tweet.query.filter_by(owner_id=user_id)
        total = query.count()
        tweets = query.order_by(
            Tweet.created_at.desc(), Tweet.tweet_id
        ).offset((page - 1) * limit).limit(limit).all()

        tweet_ids = [t.tweet_id for t in tweets]
        likes = count_likes_bulk('tweet', tweet_ids)
        liked = liked_ids_bulk('tweet', tweet_ids, viewer_id)

        docs = [
            TweetDto.from_model(t, likes_count=likes.get(t.tweet_id, 0), is_liked=t.tweet_id in liked)
            for t in tweets
        ]
        return PageDto.of(docs, total, page, limit)

    @staticmethod
    @transactional
    def update_tweet(tweet_id: str, user_id: str, content: str) -> TweetDto:
        tweet = get_owned_tweet(tweet_id, user_id)
        tweet.content = _clean_content(content)
        db.session.flush()

        return TweetDto.from_model(
            tweet,
            likes_count=count_likes('tweet', tweet.tweet_id),
            is_liked=is_liked_by('tweet', tweet.tweet_id, user_id)
        )

    @staticmethod
    @transactional
    def delete_tweet(tweet_id: str, user_id: str):
        tweet = get_owned_tweet(tweet_id, user_id)

        LikeService.delete_likes_of('tweet', [tweet.tweet_id])
        db.session.delete(tweet)

        logger.info(f"User {user_id} deleted tweet {tweet_id}")
