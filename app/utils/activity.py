from typing import Optional

from flask_login import current_user

from app.models import ActivityLog, db


def log_activity(
    activity: str, user_id: Optional[str] = None, commit: bool = True
) -> None:
    """Record an activity performed by a user.

    Defaults to the logged-in user when ``user_id`` is omitted.  Pass
    ``commit=False`` to leave the row in the session for the caller's commit.
    """
    if user_id is None:
        if current_user and not current_user.is_anonymous:
            user_id = current_user.id
    db.session.add(ActivityLog(user_id=user_id, activity=activity))
    if commit:
        db.session.commit()
