import logging
import os


class LevelFormatter(logging.Formatter):
    LEVEL_TAGS = {
        logging.DEBUG: "🐛 DEBUG",
        logging.INFO: "ℹ️  INFO",
        logging.WARNING: "⚠️  WARNING",
        logging.ERROR: "❌ ERROR",
        logging.CRITICAL: "🔥 CRITICAL",
    }

    def format(self, record: logging.LogRecord) -> str:
        record.level_tag = self.LEVEL_TAGS.get(record.levelno, record.levelname)
        return super().format(record)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name.split(".")[-1])
    mode = os.getenv("ENV", "prod").lower()
    logger.setLevel(logging.DEBUG if mode != "prod" else logging.INFO)

    # Modules share names across packages, only attach one handler per logger
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(LevelFormatter("%(asctime)s - %(name)s - %(level_tag)s - %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
