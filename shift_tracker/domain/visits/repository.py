"""Visit repository - Database operations for visits"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Visit
from ...shared.retry import retry_status_write


class VisitRepository:
    """Repository for visit database operations"""

    @staticmethod
    def get_by_schedule_id(db: Session, schedule_id: int) -> Optional[Visit]:
        """Get the visit record for a schedule, if one exists yet"""
        return db.query(Visit).filter(Visit.schedule_id == schedule_id).first()

    @staticmethod
    @retry_status_write
    def create_visit(db: Session, schedule_id: int, **visit_data) -> Visit:
        """Create the visit record for a schedule"""
        visit = Visit(schedule_id=schedule_id, **visit_data)
        db.add(visit)
        db.commit()
        db.refresh(visit)
        return visit

    @staticmethod
    @retry_status_write
    def update_visit(db: Session, visit: Visit, **updates) -> Visit:
        """Update a visit; None values are written, so callers can clear fields"""
        for key, value in updates.items():
            if hasattr(visit, key):
                setattr(visit, key, value)

        db.commit()
        db.refresh(visit)
        return visit
