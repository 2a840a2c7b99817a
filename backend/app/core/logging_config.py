"""
Logging setup for the Parcel Tracker.

All modules log through children of the ``parcel_tracker`` logger and
attach structured context with ``extra=``. Records from the app loggers
also carry the ``correlation_id`` of the request that produced them.
"""

import logging

from backend.app.core.observability import CorrelationIdFilter

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] [%(correlation_id)s] %(message)s"

APP_LOGGERS = (
    "parcel_tracker",
    "parcel_tracker.http",
    "parcel_tracker.service",
    "parcel_tracker.store",
)


def _add_filter_once(target) -> None:
    if not any(isinstance(f, CorrelationIdFilter) for f in target.filters):
        target.addFilter(CorrelationIdFilter())


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Install the correlation filter and a stream handler once, then set the app level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
        # Third-party records reach this handler too and need the field
        for handler in root.handlers:
            _add_filter_once(handler)
    
    # Logger filters run before propagation, so every handler sees the ID
    for name in APP_LOGGERS:
        _add_filter_once(logging.getLogger(name))
    
    app_logger = logging.getLogger("parcel_tracker")
    app_logger.setLevel(level.upper())
    return app_logger
