# notefeed/models.py
import datetime
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Boolean, PrimaryKeyConstraint, JSON
from sqlalchemy.orm import relationship
from .database import Base

class User(Base):
    __tablename__ = 'users'
    id = Column(String, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)
    bio = Column(String, nullable=True)
    is_bot = Column(Boolean, default=False, nullable=False)

    # Denormalised counters, kept up to date by the follow flow
    followers_count = Column(Integer, default=0, nullable=False)
    following_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    notes = relationship("Note", back_populates="user", foreign_keys="Note.user_id")

class Following(Base):
    __tablename__ = 'followings'

    follower_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    followee_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    __table_args__ = (
        PrimaryKeyConstraint('follower_id', 'followee_id'),
    )

class FollowRequest(Base):
    """A row only exists while the request is pending. Accepting, rejecting
    or cancelling the request deletes it."""
    __tablename__ = 'follow_requests'

    id = Column(String, primary_key=True, index=True)
    follower_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    followee_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

class Note(Base):
    __tablename__ = 'notes'
    id = Column(String, primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
    user_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    text = Column(String, nullable=True)
    cw = Column(String, nullable=True)
    visibility = Column(String, default="public", nullable=False) # "public", "home", "followers", "specified"
    visible_user_ids = Column(JSON, default=list, nullable=False)
    reactions = Column(JSON, default=dict, nullable=False) # {"👍": 3, ...}

    reply_id = Column(String, ForeignKey('notes.id'), nullable=True)
    renote_id = Column(String, ForeignKey('notes.id'), nullable=True)

    user = relationship("User", back_populates="notes", foreign_keys=[user_id])
    reply = relationship("Note", remote_side=[id], foreign_keys=[reply_id])
    renote = relationship("Note", remote_side=[id], foreign_keys=[renote_id])

class NoteReaction(Base):
    __tablename__ = 'note_reactions'
    id = Column(String, primary_key=True, index=True)
    note_id = Column(String, ForeignKey('notes.id'), nullable=False, index=True)
    user_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    reaction = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

class Notification(Base):
    __tablename__ = 'notifications'

    id = Column(String, primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
    notifiee_id = Column(String, ForeignKey('users.id'), nullable=False, index=True)
    notifier_id = Column(String, ForeignKey('users.id'), nullable=True) # Nullable for system notifications

    type = Column(String, nullable=False) # see schemas.notification.NOTIFICATION_TYPES
    note_id = Column(String, nullable=True) # No FK: the note may be deleted after the notification

    reaction = Column(String, nullable=True)
    achievement = Column(String, nullable=True)
    custom_body = Column(String, nullable=True)
    custom_header = Column(String, nullable=True)
    custom_icon = Column(String, nullable=True)
