from datetime import date, datetime, time, timedelta

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.models.model import User


def _contains(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _day_window(day: date):
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def _range_filters(column, low, high):
    conditions = []
    if low is not None:
        conditions.append(column >= low)
    if high is not None:
        conditions.append(column <= high)
    return conditions


def create_user(
    db: Session,
    username: str,
    password_hash: str,
    firstname: str,
    lastname: str,
    salary: float,
    age: int,
    registerday: datetime,
):
    db_user = User(
        username=username,
        password_hash=password_hash,
        firstname=firstname,
        lastname=lastname,
        salary=salary,
        age=age,
        registerday=registerday,
        signintime=None,
    )
    db.add(db_user)
    db.commit()
    return db_user


def update_signin_time(db: Session, username: str, signintime: datetime):
    db.execute(update(User).where(User.username == username).values(signintime=signintime))
    db.commit()


def get_user_by_username(db: Session, username: str):
    return db.query(User).filter(User.username == username).first()


def get_registerday(db: Session, username: str):
    return db.query(User.registerday).filter(User.username == username).scalar()


def get_all_users(db: Session):
    return db.query(User).order_by(User.registerday.desc(), User.username.asc()).all()


def search_users_by_name(db: Session, firstname: str | None = None, lastname: str | None = None):
    query = db.query(User)
    if firstname is not None:
        query = query.filter(User.firstname.ilike(_contains(firstname), escape="\\"))
    if lastname is not None:
        query = query.filter(User.lastname.ilike(_contains(lastname), escape="\\"))
    return query.order_by(User.firstname.asc(), User.lastname.asc(), User.username.asc()).all()


def get_users_by_salary_range(db: Session, low: float | None, high: float | None):
    return (
        db.query(User)
        .filter(*_range_filters(User.salary, low, high))
        .order_by(User.salary.asc(), User.username.asc())
        .all()
    )


def get_users_by_age_range(db: Session, low: int | None, high: int | None):
    return (
        db.query(User)
        .filter(*_range_filters(User.age, low, high))
        .order_by(User.age.asc(), User.username.asc())
        .all()
    )


def get_users_registered_after(db: Session, moment: datetime):
    return (
        db.query(User)
        .filter(User.registerday > moment)
        .order_by(User.registerday.asc(), User.username.asc())
        .all()
    )


def get_users_registered_same_day(db: Session, day: date):
    start, end = _day_window(day)
    return (
        db.query(User)
        .filter(User.registerday >= start, User.registerday < end)
        .order_by(User.username.asc())
        .all()
    )


def get_users_registered_on(db: Session, day: date):
    start, end = _day_window(day)
    return (
        db.query(User)
        .filter(User.registerday >= start, User.registerday < end)
        .order_by(User.registerday.asc(), User.username.asc())
        .all()
    )


def get_users_never_signed_in(db: Session):
    return (
        db.query(User)
        .filter(User.signintime.is_(None))
        .order_by(User.registerday.asc(), User.username.asc())
        .all()
    )
