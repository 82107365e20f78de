# bettificator/utils/logger.py
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Basic stdout formatting for the whole process."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
    )


def get_logger(name: str) -> logging.Logger:
    """Dohvati logger za modul"""
    return logging.getLogger(name)


class RunLogger:
    """Run-scoped logger with optional dated file output."""

    def __init__(self, log_dir: Optional[str] = None, name: str = "bettificator.run"):
        self.logger = get_logger(name)
        self.file_handler: Optional[logging.Handler] = None
        if log_dir:
            path = Path(log_dir)
            path.mkdir(parents=True, exist_ok=True)
            log_file = path / f"retrieve_{datetime.now().strftime('%Y%m%d')}.log"

            self.file_handler = logging.FileHandler(log_file, encoding='utf-8')
            self.file_handler.setLevel(logging.INFO)
            self.file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            logging.getLogger().addHandler(self.file_handler)

    def log_run_start(self, command: str):
        self.logger.info("=" * 50)
        self.logger.info(f"🚀 RETRIEVE {command.upper()} STARTED")
        self.logger.info(f"Time: {datetime.now().isoformat()}")
        self.logger.info("=" * 50)

    def log_run_end(self, command: str, success: bool, duration: float, stats: Optional[dict] = None):
        self.logger.info("=" * 50)

        if success:
            self.logger.info(f"✅ RETRIEVE {command.upper()} COMPLETED")
        else:
            self.logger.info(f"❌ RETRIEVE {command.upper()} FAILED")

        self.logger.info(f"Duration: {duration:.2f}s")

        if stats:
            self.logger.info(f"Stats: {stats}")

        self.logger.info("=" * 50)

    def close(self):
        if self.file_handler is not None:
            logging.getLogger().removeHandler(self.file_handler)
            self.file_handler.close()
            self.file_handler = None
