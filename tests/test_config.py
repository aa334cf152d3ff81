import importlib.util
import os
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

_MISSING_PYDANTIC_SETTINGS = importlib.util.find_spec("pydantic_settings") is None

if not _MISSING_PYDANTIC_SETTINGS:
    from kisan.infra.config import get_config

_KEYS = (
    "FASTAPI_PORT",
    "CROP_DATASET_PATH",
    "RISK_RANDOM_SEED",
    "LOG_PATH",
    "LOG_LEVEL",
    "CORS_ALLOW_ORIGINS",
)


@unittest.skipUnless(
    not _MISSING_PYDANTIC_SETTINGS, "pydantic_settings is not installed"
)
class AppConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._env_backup = {key: os.environ.get(key) for key in _KEYS}
        for key in _KEYS:
            os.environ.pop(key, None)
        get_config.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._env_backup.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_config.cache_clear()

    def test_defaults(self) -> None:
        cfg = get_config()
        self.assertEqual(cfg.fastapi_port, 5000)
        self.assertIsNone(cfg.risk_random_seed)
        self.assertIsNone(cfg.crop_dataset_path)
        self.assertEqual(cfg.log_level, "INFO")
        self.assertEqual(cfg.cors_origins, ["*"])

    def test_environment_overrides(self) -> None:
        os.environ["FASTAPI_PORT"] = "8080"
        os.environ["RISK_RANDOM_SEED"] = "42"
        os.environ["LOG_LEVEL"] = " debug "
        os.environ["CORS_ALLOW_ORIGINS"] = "http://a.test, http://b.test,"
        get_config.cache_clear()
        cfg = get_config()
        self.assertEqual(cfg.fastapi_port, 8080)
        self.assertEqual(cfg.risk_random_seed, 42)
        self.assertEqual(cfg.log_level, "DEBUG")
        self.assertEqual(cfg.cors_origins, ["http://a.test", "http://b.test"])

    def test_blank_values_mean_unset(self) -> None:
        os.environ["RISK_RANDOM_SEED"] = ""
        os.environ["CROP_DATASET_PATH"] = "  "
        get_config.cache_clear()
        cfg = get_config()
        self.assertIsNone(cfg.risk_random_seed)
        self.assertIsNone(cfg.crop_dataset_path)

    def test_config_is_cached(self) -> None:
        self.assertIs(get_config(), get_config())


if __name__ == "__main__":
    unittest.main()
