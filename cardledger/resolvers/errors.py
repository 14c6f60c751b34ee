"""Conversion of application errors for the GraphQL surface"""

import logging
from typing import Type, TypeVar

from cardledger.errors.base import ApplicationError
from cardledger.errors.common import AllocationFailure
from graphql import GraphQLError
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

R = TypeVar("R")


def as_graphql_error(exc: ApplicationError) -> GraphQLError:
    """Used by list-typed operations, which have no envelope to carry the failure."""
    return GraphQLError(
        exc.error,
        extensions={"error_code": exc.error_code, "where": exc.where},
    )


def failed(response_type: Type[R], action: str, exc: Exception) -> R:
    """Mutation envelope for a failure, the message names the root cause."""
    if isinstance(exc, ApplicationError):
        logger.error(exc.as_dict())
        reason = exc.error
    elif isinstance(exc, SQLAlchemyError):
        logger.exception("Database failure while %s", action.lower())
        reason = AllocationFailure().error
    else:
        raise exc
    return response_type(message=f"{action}: {reason}", success=False)
