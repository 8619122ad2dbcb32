import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from food_delight.api.error_handlers import register_error_handlers
from food_delight.core import config
from food_delight.database import close_database, init_database
from food_delight.routes import auth_routes, order_routes

app = FastAPI(title='Food Delight API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=False,
    allow_methods=['*'],
    allow_headers=['*'],
)

register_error_handlers(app)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_application() -> None:
    logging.basicConfig(level=config.LOG_LEVEL)
    config.validate_runtime_config()
    try:
        init_database()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.on_event('shutdown')
def shutdown_application() -> None:
    close_database()
    logger.info('Database connections closed')


@app.get('/')
def root():
    return {'status': 'Food Delight API Running'}


app.include_router(auth_routes.router, prefix='/api')
app.include_router(order_routes.router, prefix='/api')
