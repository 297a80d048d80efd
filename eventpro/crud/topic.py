# File: eventpro/crud/topic.py
from typing import List, Optional
from sqlalchemy.orm import Session
from eventpro.models.topic import Topic
from eventpro.models.event_speaker import EventSpeaker


class CRUDTopic:

    def get(self, db: Session, id: int) -> Optional[Topic]:
        return db.query(Topic).filter(Topic.id == id).first()

    def get_by_event(self, db: Session, *, event_id: int) -> List[Topic]:
        return db.query(Topic).filter(Topic.event_id == event_id).order_by(Topic.id).all()

    def create(self, db: Session, *, event_id: int, title: str, description: Optional[str] = None) -> Topic:
        db_obj = Topic(event_id=event_id, title=title, description=description)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def assign_speaker(self, db: Session, *, topic_id: int, speaker_id: int) -> EventSpeaker:
        assignment = EventSpeaker(topic_id=topic_id, speaker_id=speaker_id)
        db.add(assignment)
        db.commit()
        db.refresh(assignment)
        return assignment


topic = CRUDTopic()
