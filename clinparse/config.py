# clinparse/config.py
import copy
import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# Определение базовых путей относительно корня проекта
BASE_DIR = Path(__file__).resolve().parent.parent
MODELS_DIR = BASE_DIR / "models"
CONFIG_PATH = BASE_DIR / "config" / "parser.yaml"

# Настройки модели составляющих.
# Stanza сама скачивает английские модели в model_dir при первом запуске.
PARSER_CONFIG = {
    "stanza": {
        "lang": "en",
        "package": "default",
        "processors": "tokenize,pos,constituency",
        "use_gpu": False,
        "model_dir": str(MODELS_DIR / "stanza"),
        "download_method": "reuse_resources",
    },
    "pipeline": {
        # Показывать прогресс-бар при пакетной обработке документов
        "progress": True,
    },
}


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path=None) -> dict:
    """
    Значения по умолчанию, поверх которых накладывается YAML-файл (если он есть).
    """
    config = copy.deepcopy(PARSER_CONFIG)
    path = Path(path) if path else CONFIG_PATH
    if not path.exists():
        logger.debug(f"Config {path} not found, using defaults")
        return config

    with open(path, 'r', encoding='utf-8') as f:
        overrides = yaml.safe_load(f) or {}

    logger.info(f"Loaded parser config from {path}")
    return _merge(config, overrides)
