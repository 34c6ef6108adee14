import uuid
from datetime import datetime
from sqlalchemy import Column, String, TIMESTAMP, ForeignKey, Index
from sqlalchemy.orm import relationship
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class Subscription(db.Model):
    __tablename__ = 'subscription'

    subscription_id = Column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        comment='Subscription ID (UUID)'
    )

    subscriber_id = Column(
        String(36),
        ForeignKey('user.user_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='Subscribing user ID (FK)'
    )
    channel_id = Column(
        String(36),
        ForeignKey('user.user_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='Channel owner ID (FK)'
    )

    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='Subscribed at')

    subscriber = relationship('User', foreign_keys=[subscriber_id])
    channel = relationship('User', foreign_keys=[channel_id])

    __table_args__ = (
        db.UniqueConstraint('subscriber_id', 'channel_id', name='uk_subscription_pair'),
        Index('idx_subscription_channel', 'channel_id', 'created_at'),
    )

    def __repr__(self):
        return f'<Subscription {self.subscriber_id} -> {self.channel_id}>'
