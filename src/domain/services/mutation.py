"""All-or-nothing execution of a primary write and its derived writes."""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeVar

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.exceptions import ConflictError, StoreFailureError
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

T = TypeVar("T")

PrimaryWrite = Callable[[IUnitOfWork], Awaitable[T]]
# A derived write receives the primary write's result (e.g. the created task).
Effect = Callable[[IUnitOfWork, T], Awaitable[Any]]


class MutationCoordinator:
    """Commits a primary write together with its effects as one unit.

    Callers authorize and validate first, inside the same Unit of Work, and
    only then hand the writes over. ``execute`` applies the primary write,
    then each effect in order, then commits. If anything raises, the
    transaction is rolled back and nothing is observable afterwards.
    """

    async def execute(
        self,
        uow: IUnitOfWork,
        primary: PrimaryWrite[T],
        effects: Sequence[Effect[T]] = (),
        *,
        operation: str = "mutation",
    ) -> T:
        try:
            result = await primary(uow)
            for effect in effects:
                await effect(uow, result)
            await uow.commit()
        except IntegrityError as exc:
            await uow.rollback()
            logger.warning("mutation_conflict", operation=operation, error=str(exc.orig))
            raise ConflictError() from exc
        except SQLAlchemyError as exc:
            await uow.rollback()
            logger.error("mutation_store_failure", operation=operation, error=str(exc))
            raise StoreFailureError() from exc
        except Exception:
            await uow.rollback()
            logger.warning("mutation_aborted", operation=operation, exc_info=True)
            raise

        logger.debug("mutation_committed", operation=operation, effects=len(effects))
        return result
