"""FastAPI app initialization, GraphQL mount, exception handling"""

import logging
import traceback
from contextlib import asynccontextmanager

from cardledger.config import Config, get_config
from cardledger.realtime.broker import CardBroker
from cardledger.resolvers.context import get_context
from cardledger.resolvers.schema import schema
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from strawberry.fastapi import GraphQLRouter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.broker.close()


config: Config = get_config()
app = FastAPI(title=config.app_name, version=config.app_version, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    # cookies carry the session, so origins have to be explicit
    allow_credentials=True,
    allow_origins=config.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
if not config.secret_key:
    raise ValueError(
        "CARDLEDGER_SECRET_KEY is missing in the configuration. Please set a valid secret key."
    )

# one broker per process, every live subscriber of this app registers here
app.state.broker = CardBroker(queue_size=config.subscriber_queue_size)


@app.exception_handler(SQLAlchemyError)
def sqlite_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(exc)
    if logger.isEnabledFor(logging.DEBUG):
        traceback.print_exception(exc)
    return JSONResponse(
        status_code=418,
        content={"error_code": 1500, "error": exc._message()},
    )


@app.get("/health", tags=["Health"])
def health() -> dict:
    return {"status": "ok", "subscribers": app.state.broker.subscriber_count}


graphql_router = GraphQLRouter(schema, context_getter=get_context)
app.include_router(graphql_router, prefix="/graphql")
