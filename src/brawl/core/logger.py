"""Global logging configuration.

Call :func:`setup_logger` once at application start-up; every other module
logs straight through loguru::

    from loguru import logger
    logger.info("Fight {} resolved: winner={}", fight_id, winner_id)
"""
from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent

_FMT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level:8}</level> | "
    "<cyan>{extra[src]}</cyan> | "
    "{message}"
)


def _src_patcher(record: dict) -> None:
    """Store a package-relative ``path:line`` in ``extra["src"]``."""
    try:
        rel = Path(record["file"].path).relative_to(_PACKAGE_ROOT)
        record["extra"]["src"] = f"{rel.as_posix()}:{record['line']}"
    except ValueError:
        record["extra"]["src"] = f"{record['file'].name}:{record['line']}"


def setup_logger(
    log_dir: Path | None = None,
    level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure the global loguru logger.

    The console sink filters at *level*. When *log_dir* is given, a full
    DEBUG file (``.debug.log``) is always written, plus a file filtered at
    *level* unless *level* is already DEBUG.
    """
    logger.remove()
    logger.configure(patcher=_src_patcher)
    logger.add(sys.stderr, level=level, format=_FMT)

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_dir / "brawl_{time:YYYY-MM-DD}.debug.log",
        level="DEBUG",
        rotation=rotation,
        retention=retention,
        encoding="utf-8",
        format=_FMT,
    )
    if level.upper() != "DEBUG":
        logger.add(
            log_dir / "brawl_{time:YYYY-MM-DD}.log",
            level=level,
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
            format=_FMT,
        )
