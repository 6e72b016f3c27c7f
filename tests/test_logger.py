from loguru import logger

from brawl.core.logger import setup_logger


def test_file_sinks_are_written(tmp_path) -> None:
    setup_logger(tmp_path, level="INFO")
    try:
        logger.debug("debug detail")
        logger.info("fight resolved")
        logger.complete()

        debug_files = list(tmp_path.glob("brawl_*.debug.log"))
        level_files = [path for path in tmp_path.glob("brawl_*.log") if not path.name.endswith(".debug.log")]
        assert len(debug_files) == 1
        assert len(level_files) == 1
        debug_text = debug_files[0].read_text(encoding="utf-8")
        level_text = level_files[0].read_text(encoding="utf-8")
        assert "debug detail" in debug_text
        assert "fight resolved" in debug_text
        assert "debug detail" not in level_text
        assert "fight resolved" in level_text
        assert "test_logger.py" in level_text
    finally:
        setup_logger()


def test_debug_level_writes_single_file(tmp_path) -> None:
    setup_logger(tmp_path, level="DEBUG")
    try:
        logger.debug("only once")
        assert [path.name.endswith(".debug.log") for path in tmp_path.glob("*.log")] == [True]
    finally:
        setup_logger()
