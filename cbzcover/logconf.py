import json
import logging
import logging.config
import os


def setup_logging(
    default_path='logging_conf.json',
    default_level=logging.WARNING,
    env_key='LOG_CFG',
    level_key='LOG_LEVEL',
):
    """Setup logging configuration

    A json dictConfig file (path from $LOG_CFG, else default_path) wins,
    otherwise log to stderr with the level named in $LOG_LEVEL.
    """
    path = default_path
    value = os.getenv(env_key, None)
    if value:
        path = value
    if os.path.exists(path):
        with open(path, 'rt') as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    else:
        level = os.getenv(level_key, None)
        if level:
            level = level.upper()
            if not isinstance(logging.getLevelName(level), int):
                level = default_level
        else:
            level = default_level
        logging.basicConfig(
            level=level,
            format="%(levelname)s %(name)s: %(message)s")
