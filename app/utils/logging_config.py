"""로깅 설정 모듈.

Basic logging configuration for the application.
``setup_logging`` attaches a console handler to the root logger exactly
once; repeated calls (tests, reloads) are no-ops.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    """루트 로거를 설정합니다.

    Configure the root logger with a timestamped console handler.

    Args:
        level: 로그 레벨 이름, 대소문자 무시 (Level name, case-insensitive)
    """
    root: logging.Logger = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
