"""Execution context for a running httpr server"""

import logging
from typing import Optional

from httpr.config.schema import HttprConfig
from httpr.core.failure import FailureCycle
from httpr.reports.request_log import RequestLogger, RequestRecord


logger = logging.getLogger(__name__)


class Context:
    """
    Execution profile for one server.

    Built once at startup from a validated config and handed to the
    application, which owns it for its lifetime. Holds the failure cycle and
    the request log sink.
    """

    def __init__(self, config: HttprConfig, request_logger: Optional[RequestLogger] = None):
        self.config = config
        self.failure_cycle = FailureCycle(config.failure_mode, default_code=config.response.code)

        if request_logger is None:
            request_logger = RequestLogger.open(
                config.logging.output,
                json_format=config.logging.json_format,
                pretty=config.logging.pretty,
            )
        self.request_logger = request_logger

        if self.failure_cycle.is_degenerate:
            logger.warning(
                "Failure simulation is enabled but both failure and success counts are 0; "
                "every response will use the default code %d",
                config.response.code,
            )

    @property
    def delay_seconds(self) -> float:
        return self.config.response.delay_ms / 1000

    @property
    def echo(self) -> bool:
        return self.config.response.echo

    def simulate_failure(self) -> int:
        """Status code for the current request"""
        return self.failure_cycle.evaluate()

    def log_request(self, record: RequestRecord) -> None:
        self.request_logger.log(record)

    def close(self) -> None:
        self.request_logger.close()
