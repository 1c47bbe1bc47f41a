"""Base services container for dependency injection."""

from typing import Optional

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject mock services for testing.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config is ignored.
        owner_id: Optional owner id overriding the configured session owner.
    """

    def __init__(self, config: Config, db_manager=None, owner_id: Optional[str] = None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            db_manager: Optional database manager for dependency injection (testing).
                       If None, creates DatabaseManager from config.
            owner_id: Optional session owner override.
        """
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.records import SqliteRecordStore
        from services.session import ConfigSession
        from services.ledger import LedgerService

        self.records = SqliteRecordStore(self.db_manager)
        self.session = ConfigSession(config, override=owner_id)
        self.ledger = LedgerService(
            self.records, self.session, chronological=config.chart_chronological
        )
