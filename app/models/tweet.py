import uuid
from datetime import datetime
from sqlalchemy import Column, String, TIMESTAMP, ForeignKey, Index
from sqlalchemy.orm import relationship
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class Tweet(db.Model):
    __tablename__ = 'tweet'

    tweet_id = Column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        comment='Tweet ID (UUID)'
    )

    content = Column(String(280), nullable=False, comment='Post body (1..280 chars)')

    owner_id = Column(
        String(36),
        ForeignKey('user.user_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='Author ID (FK)'
    )

    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='Posted at')
    updated_at = Column(
        TIMESTAMP,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment='Updated at'
    )

    owner = relationship('User')

    __table_args__ = (
        Index('idx_tweet_owner', 'owner_id', 'created_at'),
    )

    def __repr__(self):
        return f'<Tweet {self.tweet_id}>'
