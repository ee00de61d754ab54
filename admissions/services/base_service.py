from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from admissions.core.exceptions import AppError, PersistenceError, StorageError
from admissions.repositories.base_repository import BaseRepository
from admissions.utils.logging import get_logger

LOGGER = get_logger(__name__)


class BaseService(ABC):
    """Base class for admissions services.

    ``execute`` runs ``validate`` then ``run``, both routed on an ``action``
    keyword. Database and storage failures raised while running an action
    listed in ``persistence_errors`` are reported as ``PersistenceError``
    prefixed with that action's message.
    """

    # action -> message prefix, e.g. {"submit_application": "Failed to submit application"}
    persistence_errors: Dict[str, str] = {}

    def __init__(self, repository: Optional[BaseRepository] = None):
        self.repository = repository
        self.logger = LOGGER

    async def execute(self, *args, **kwargs) -> Any:
        """Validate the input and run the requested action.

        Raises:
            ValidationError: The input was rejected
            PersistenceError: The store or storage call failed
            AppError: Any other failure
        """
        action = kwargs.get("action")
        try:
            self.validate(*args, **kwargs)
            return await self.run(*args, **kwargs)

        except (SQLAlchemyError, StorageError) as e:
            raise self._persistence_error(action, e)

        except AppError:
            raise

        except Exception as e:
            self.logger.error(
                f"Service execution failed: {str(e)}",
                exc_info=True,
                extra={"service": self.__class__.__name__, "action": action}
            )
            raise AppError(f"Service execution failed: {str(e)}", original_error=e)

    def _persistence_error(self, action: Optional[str], error: Exception) -> Exception:
        prefix = self.persistence_errors.get(action)
        if prefix is None:
            # Storage errors already carry their own message
            if isinstance(error, StorageError):
                return error
            prefix = "Database operation failed"

        self.logger.error(
            f"{prefix}: {error}",
            exc_info=True,
            extra={
                "service": self.__class__.__name__,
                "action": action,
                "error_type": type(error).__name__,
            },
        )
        return PersistenceError(f"{prefix}: {error}", original_error=error)

    def validate(self, *args, **kwargs) -> None:
        """Reject invalid input with ``ValidationError``. Accepts everything by default."""

    @abstractmethod
    async def run(self, *args, **kwargs) -> Any:
        """Perform the action."""
