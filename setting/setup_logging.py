import logging
import sys
from pathlib import Path


def setup_logging(level: int | str = logging.INFO, log_file: str | Path | None = None) -> None:
    """
    Configures the root logger for the generator host.
    - message format with timestamp, level and origin
    - console output (stdout)
    - optional log file, truncated on every run
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.insert(0, logging.FileHandler(log_path, mode="w", encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d | %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )

    logging.getLogger("terrain_logic").setLevel(level)
    logging.getLogger("numba").setLevel(logging.WARNING)
