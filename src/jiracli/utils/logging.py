"""Console logging setup and structured events for report runs."""

import json
import logging
import structlog
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional

from ..config import LoggingConfig


class StructuredLogger:
    """Handles structured JSON logging for worklog report runs."""

    def __init__(self, config: LoggingConfig):
        self.config = config
        self.log_file: Optional[Path] = None

        if config.log_dir:
            log_dir = Path(config.log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = log_dir / "reports.jsonl"

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="ISO"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                structlog.processors.JSONRenderer(),
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        self.logger = structlog.get_logger("jiracli.report")

    def log_report_start(
        self,
        account_id: str,
        period: str,
        time_range: Dict[str, str],
        detailed: bool = False,
    ) -> None:
        """Log report run start."""
        self.logger.info(
            "report_started",
            operation="show_work_log",
            account_id=account_id,
            period=period,
            time_range=time_range,
            detailed=detailed,
            timestamp=datetime.now().isoformat(),
        )

    def log_report_complete(
        self,
        duration_ms: int,
        period: str,
        time_range: Dict[str, str],
        total_seconds: int,
        status: str = "success",
        error: Optional[str] = None,
    ) -> None:
        """Log report run completion."""
        log_entry = {
            "operation": "show_work_log",
            "status": status,
            "duration_ms": duration_ms,
            "period": period,
            "time_range": time_range,
            "total_seconds": total_seconds,
            "timestamp": datetime.now().isoformat(),
        }

        if error:
            log_entry["error"] = error

        self.logger.info("report_completed", **log_entry)

        if self.log_file is not None:
            self._write_to_file(log_entry)

    def log_api_error(self, service: str, error: str) -> None:
        """Log API errors that cut a report short."""
        self.logger.error(
            "api_error",
            operation="worklog_fetch",
            service=service,
            error=error,
            timestamp=datetime.now().isoformat(),
        )

    def _write_to_file(self, log_entry: Dict[str, Any]) -> None:
        """Write log entry to JSONL file."""
        try:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")
        except OSError as e:
            # A report is still printed when its run log cannot be written
            logging.getLogger(__name__).warning(f"Failed to write to log file: {e}")


def setup_console_logging(level: str) -> None:
    """Setup basic console logging on stderr."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
        force=True,
    )
