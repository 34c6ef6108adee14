import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, Boolean, TIMESTAMP
from sqlalchemy.orm import relationship
from werkzeug.security import generate_password_hash, check_password_hash
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class User(db.Model):
    __tablename__ = 'user'

    # Primary Key
    user_id = Column(String(36), primary_key=True, default=generate_uuid, comment='User ID (UUID)')

    # Profile
    username = Column(String(50), nullable=False, unique=True, index=True, comment='Channel handle (lowercase)')
    email = Column(String(255), nullable=False, unique=True, comment='Email (lowercase)')
    fullname = Column(String(100), nullable=False, comment='Display name')
    avatar = Column(String(500), nullable=False, comment='Avatar URL')
    avatar_public_id = Column(String(255), comment='Media host id of the avatar')
    cover_image = Column(String(500), comment='Cover image URL')
    cover_image_public_id = Column(String(255), comment='Media host id of the cover image')

    # Credentials
    password = Column(String(255), nullable=False, comment='Password hash')
    refresh_token = Column(Text, comment='Currently valid refresh token')

    has_completed_onboarding = Column(Boolean, default=False, nullable=False, comment='Preference tags chosen')

    # Timestamps
    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='Created at')
    updated_at = Column(
        TIMESTAMP,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment='Updated at'
    )

    # Relationships
    preference_tags = relationship(
        'UserPreferenceTag',
        back_populates='user',
        cascade='all, delete-orphan',
        order_by='UserPreferenceTag.tag'
    )
    videos = relationship(
        'Video',
        back_populates='owner',
        lazy='dynamic'
    )

    def __repr__(self):
        return f'<User {self.username}>'

    def set_password(self, raw_password):
        self.password = generate_password_hash(raw_password)

    def check_password(self, raw_password):
        return check_password_hash(self.password, raw_password)

    @property
    def preference_tag_names(self):
        return [p.tag for p in self.preference_tags]

    def replace_preference_tags(self, tags):
        from app.models.user_preference_tag import UserPreferenceTag

        existing = {p.tag: p for p in self.preference_tags}
        self.preference_tags = [existing.get(tag) or UserPreferenceTag(tag=tag) for tag in tags]

    def complete_onboarding(self):
        if self.has_completed_onboarding:
            return

        self.has_completed_onboarding = True
