import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from campus_events.core import config
from campus_events.database import Base, engine, ensure_event_schema
from campus_events.models import comment, event, location, rso, university, user  # noqa: F401
from campus_events.routes import (
    auth_routes,
    comment_routes,
    event_routes,
    rso_routes,
    university_routes,
)

app = FastAPI(title='Campus Events API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_event_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'Campus Events API Running'}


app.include_router(auth_routes.router, prefix='/auth')
app.include_router(university_routes.router, prefix='/universities')
app.include_router(rso_routes.router, prefix='/rsos')
app.include_router(event_routes.router, prefix='/events')
app.include_router(comment_routes.router)
