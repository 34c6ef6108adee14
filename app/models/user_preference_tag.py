from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from common.extensions import db


class UserPreferenceTag(db.Model):
    __tablename__ = 'user_preference_tag'

    user_preference_tag_id = Column(Integer, primary_key=True, autoincrement=True, comment='Preference tag ID')

    user_id = Column(
        String(36),
        ForeignKey('user.user_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='User ID (FK)'
    )
    tag = Column(String(50), nullable=False, comment='Catalog tag chosen during onboarding')

    user = relationship('User', back_populates='preference_tags')

    __table_args__ = (
        db.UniqueConstraint('user_id', 'tag', name='uk_user_preference_tag'),
    )

    def __repr__(self):
        return f'<UserPreferenceTag {self.user_id} {self.tag}>'
